# pizarra

A small distributed blackboard in the Linda style. Clients post tuples,
remove them and read them by pattern through a front server, which hands
each request to one of three storage servers according to the tuple's
size. All links use a synchronous protocol: every message sent is
acknowledged with `ACK` before the sender goes on.

The package also carries a few concurrency pieces: a bounded FIFO queue,
an event logger that serves writers in arrival order, and some small
demonstration programs.

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Tuples and patterns

A tuple holds text fields and is written as `[a,b,c]`.

```python
from pizarra.tuples import LindaTuple

t = LindaTuple("1", "mi casa", "arbol")
t.get(2)            # "mi casa"  (positions count from 1)
str(t)              # "[1,mi casa,arbol]"
len(t)              # 3

blank = LindaTuple.blank(3)
blank.set(2, "hola")
blank.set(3, "Mundo")
str(blank)          # "[,hola,Mundo]"

LindaTuple.from_string("[a,b,c,45,34,pan]")
```

A pattern is a tuple in which some fields are variables: a `?` followed
by one capital letter, such as `?X`. A variable matches any value, and
the same variable must take the same value everywhere it appears.

```python
from pizarra.store import TupleList

store = TupleList()
item = LindaTuple("aprieta", "el", "pan", "45", "34", "88")
store.insert(str(item), item)
store.find(LindaTuple("aprieta", "?X", "pan", "?Y", "34", "?Z"))
```

`TupleMonitor` (in `pizarra.tuple_monitor`) wraps the store for use from
many threads: `add` posts a tuple, `remove` and `read` block until a match
exists, and `finish` releases every waiter, after which they return a
blank tuple of the pattern's size.

## Running the tuple space

Start the three storage servers, each on its own port. The front server
expects them on ports 5001, 5002 and 5003 by default:

```
pizarra-storage 5001
pizarra-storage 5002
pizarra-storage 5003
```

Start the front server, giving the addresses of the storage servers for
tuples of sizes 1 to 3, 4 to 5, and 6. It listens for clients on port 5000;
`--port` and `--backend-ports` change the ports:

```
pizarra-linda 127.0.0.1 127.0.0.1 127.0.0.1
```

From Python, talk to it through the driver:

```python
from pizarra.driver import LindaDriver
from pizarra.tuples import LindaTuple

with LindaDriver("127.0.0.1", 5000) as driver:
    driver.post_note(LindaTuple("1000"))
    driver.read_note(LindaTuple("?X"))      # [1000], left in place
    driver.remove_note(LindaTuple("?X"))    # [1000], taken out
```

Ready-made clients:

```
pizarra-simple 127.0.0.1 5000          # posts, shows and removes a few tuples
pizarra-load 100 127.0.0.1 5000        # posts then removes 6 * 100 tuples
pizarra-interactive 127.0.0.1 5000     # reads action, size and tuple from stdin
pizarra-bench 127.0.0.1 5000           # many concurrent clients, average timings
```

`pizarra-bench` takes `--threads` and `--iterations` (100 each by default).

To shut the system down, send the end-of-service request. The front server
stops taking clients, tells the storage servers to finish, and lets the
connected clients drain the remaining tuples:

```
pizarra-admin 127.0.0.1 5000
```

## Concurrency building blocks

```python
from pizarra.bounded_queue import BoundedQueue

q = BoundedQueue(3)
q.enqueue(1)
q.enqueue(2)
q.first()        # 1
q.dequeue()      # 1
str(q)           # "2"
```

Enqueuing on a full queue or dequeuing from an empty one raises
`IndexError`.

```python
from pizarra.logger import EventLogger

with EventLogger("events.log") as log:
    log.add_message("WAIT,s1,0;SIGNAL,s1,1")
```

The log file starts with the header `ID,event,sectionID,val,procID,ts,ticket`.
Each `;`-separated event becomes one line recording the thread, a timestamp
and the ticket that fixed its place in arrival order. Lines are buffered and
written on `flush`, on `close`, or when the buffer fills.

## Demonstrations

```
pizarra-queue-demo        # bounded queue of numbers and of strings
pizarra-greeters          # several threads greeting at different rates
pizarra-vowels-server     # counts the vowels in each line a client sends
pizarra-vowels-client     # sends lines from stdin until "END OF SERVICE"
```

The vowel server and client use port 2000 on the local host by default
(`--port`); the server serves one client unless `--clients` says otherwise.

## What it does not do

The package has no counting semaphore and no semaphore demonstration; for
mutual exclusion and signalling between threads, use `threading` directly.