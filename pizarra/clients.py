"""Command-line clients of the tuple space."""

from __future__ import annotations

import argparse
import sys
import threading
import time

from pizarra.driver import CONNECT_ATTEMPTS, CONNECT_DELAY, LindaDriver
from pizarra.sync_socket import MESSAGE_SIZE, connect_with_retries
from pizarra.tuples import LindaTuple

MAX_LENGTH = 6
GROUP = 50
FIN_SERVER = "FIN_SERVER"

_LOAD_USAGE = """Invocar como:
   clienteCarga <NT> <IP_LS> <Port_LS> ...
      <NT>: num de tuplas
      <IP_LS>: IP del servidor Linda
      <Port_LS>: puerto del servidor Linda"""

_SIMPLE_USAGE = """Invocar como:
   mainLindaDriver <IP_LS> <Port_LS> ...
      <IP_LS>: IP del servidor Linda
      <Port_LS>: puerto del servidor Linda"""


def _args(argv: list[str] | None) -> list[str]:
    return sys.argv[1:] if argv is None else list(argv)


def load_tuples(i: int) -> list[LindaTuple]:
    """Return the tuples of sizes 1 to 6 used in round ``i`` of the load test.

    The tuple of size ``k`` holds the numbers ``i`` to ``i+k-1``.
    """
    texts = [str(i)]
    for j in range(1, MAX_LENGTH):
        texts.append(f"{texts[-1]},{i + j}")
    return [LindaTuple.from_string(f"[{text}]") for text in texts]


def _patterns() -> list[LindaTuple]:
    names = [f"?{chr(ord('A') + k)}" for k in range(MAX_LENGTH)]
    return [LindaTuple(*names[: size]) for size in range(1, MAX_LENGTH + 1)]


def admin_main(argv: list[str] | None = None) -> int:
    """Ask the tuple server at ``IP PORT`` to shut down."""
    args = _args(argv)
    if len(args) < 2:
        print("Invocar como: admin <IP_LS> <Port_LS>", file=sys.stderr)
        return 1
    try:
        with connect_with_retries(
            args[0], int(args[1]), CONNECT_ATTEMPTS, CONNECT_DELAY
        ) as conn:
            conn.send(FIN_SERVER)
            print(f"Enviado a LindaServer: {FIN_SERVER}")
            print(conn.recv(MESSAGE_SIZE))
    except (OSError, ValueError) as exc:
        print(f"Error al comunicar con LindaServer: {exc}", file=sys.stderr)
        return 1
    return 0


def simple_main(argv: list[str] | None = None) -> int:
    """Post a few tuples and take some back, showing the tuple operations."""
    args = _args(argv)
    if len(args) < 2:
        print(_SIMPLE_USAGE, file=sys.stderr)
        return 1
    try:
        with LindaDriver(args[0], args[1]) as driver:
            t1 = LindaTuple("1", "mi casa", "árbol")
            t2 = LindaTuple("1000")
            t3 = LindaTuple("aprieta", "el", "pan", "45", "34", "88")
            t4 = LindaTuple("aprieta", "fuerte", "pan", "tt", "34", "pan")
            for item in (t1, t2, t3, t3, t3, t4):
                driver.post_note(item)

            print(t1.get(2))
            print(t3)
            t3 = LindaTuple.from_string("[a,b,c,45,34,pan]")
            print(t3)

            t5 = LindaTuple.blank(3)
            t5.set(2, "hola")
            t5.set(3, "Mundo")
            driver.post_note(t5)
            print(t5)
            print(f"t5 tiene {len(t5)} elementos")

            p1 = LindaTuple("?X")
            p2 = LindaTuple("aprieta", "?X", "pan", "?Y", "34", "?Z")
            res1 = driver.remove_note(p1)
            res2 = driver.remove_note(p2)
            print(res1)
            print(res2)
    except (OSError, ValueError) as exc:
        print(f"Error al comunicar con LindaServer: {exc}", file=sys.stderr)
        return 1
    return 0


def load_main(argv: list[str] | None = None) -> int:
    """Post ``6*NT`` tuples, then remove them all: ``NT IP PORT``."""
    args = _args(argv)
    if len(args) < 3:
        print(_LOAD_USAGE, file=sys.stderr)
        return 1
    try:
        count = int(args[0])
    except ValueError:
        print(_LOAD_USAGE, file=sys.stderr)
        return 1
    try:
        with LindaDriver(args[1], args[2]) as driver:
            print("Tuplas creadas")
            patterns = _patterns()
            print("Patrones creados")
            for i in range(1, count + 1):
                for item in load_tuples(i):
                    driver.post_note(item)
            print("Tuplas insertadas")
            for i in range(1, count + 1):
                taken = [driver.remove_note(pattern) for pattern in patterns]
                if (i - 1) % GROUP == 0:
                    print(f"    {taken[0]}")
                    print(f"    {taken[-1]}")
            print("Tuplas retiradas")
    except (OSError, ValueError) as exc:
        print(f"Error al comunicar con LindaServer: {exc}", file=sys.stderr)
        return 1
    return 0


def interactive_main(argv: list[str] | None = None) -> int:
    """Read requests from standard input and send them: ``IP PORT``.

    Each request is three words: the action (1 PN, 2 RN, any other ReadN),
    the tuple size and the tuple as ``[a,b,...]``. Input ends at end of file.
    """
    args = _args(argv)
    if len(args) < 2:
        print("argumentos incorrectos")
        return 1
    try:
        with LindaDriver(args[0], args[1]) as driver:
            words = (word for line in sys.stdin for word in line.split())
            while True:
                print("Accion a realizar (PN,RN,ReadN)(1,2,3): ", end="")
                action_word = next(words, None)
                print("Numero de elementos que desea introducir en la tupla: ", end="")
                size_word = next(words, None)
                print("Escriba la tupla en formato -> [elemento,elemento,...]: ", end="")
                text = next(words, None)
                if action_word is None or size_word is None or text is None:
                    print()
                    return 0
                action = int(action_word)
                int(size_word)
                item = LindaTuple.from_string(text)
                if action == 1:
                    driver.post_note(item)
                elif action == 2:
                    driver.remove_note(item)
                else:
                    driver.read_note(item)
    except ValueError as exc:
        print(f"Entrada no valida: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error al comunicar con LindaServer: {exc}", file=sys.stderr)
        return 1


def _timed(operation, item: LindaTuple) -> float:
    start = time.perf_counter()
    operation(item)
    return time.perf_counter() - start


def _bench_worker(
    address: str,
    port: str,
    iterations: int,
    done: threading.Event,
    errors: list[BaseException],
) -> None:
    try:
        totals = {"INSERTAR": 0.0, "LEER": 0.0, "ELIMINAR": 0.0}
        with LindaDriver(address, port) as driver:
            for i in range(iterations):
                small = LindaTuple("b", "a")
                large = LindaTuple("a", "a", "b", "b", "b", "a")
                medium = LindaTuple("b", "a", "b", "a")
                for item in (small, large, medium):
                    print(item)
                if i % 3 == 0:
                    chosen = small
                elif i % 5:
                    chosen = large
                else:
                    chosen = medium
                insert = _timed(driver.post_note, chosen)
                read = _timed(driver.read_note, chosen)
                remove = _timed(driver.remove_note, chosen)
                print(f"INSERTAR: {insert}")
                print(f"LEER: {read}")
                print(f"ELIMINAR: {remove}")
                totals["INSERTAR"] += insert
                totals["LEER"] += read
                totals["ELIMINAR"] += remove
        print("*********Tiempo de ejecución medio**********")
        for label, total in totals.items():
            print(f"{label}: {total / iterations:.3f} segundos")
    except (OSError, ValueError) as exc:
        print(f"Error al comunicar con LindaServer: {exc}", file=sys.stderr)
        errors.append(exc)
    finally:
        done.set()


def bench_main(argv: list[str] | None = None) -> int:
    """Time PN, ReadN and RN from many concurrent clients: ``IP PORT``.

    Returns as soon as the first client has finished its rounds.
    """
    parser = argparse.ArgumentParser(description="Tuple space timing client")
    parser.add_argument("address")
    parser.add_argument("port")
    parser.add_argument("--threads", type=int, default=100)
    parser.add_argument("--iterations", type=int, default=100)
    args_list = _args(argv)
    if len(args_list) < 2:
        print("argumentos incorrectos")
        return 1
    args = parser.parse_args(args_list)
    if args.threads <= 0 or args.iterations <= 0:
        print("argumentos incorrectos")
        return 1
    done = threading.Event()
    errors: list[BaseException] = []
    for _ in range(args.threads):
        threading.Thread(
            target=_bench_worker,
            args=(args.address, args.port, args.iterations, done, errors),
            daemon=True,
        ).start()
    done.wait()
    return 1 if errors else 0