"""
Process-wide profiler.

Usage:
    from callprof import profiler

    profiler.attach_print_function(print, verbose=True)
    profiler.start()
    # code to profile
    profiler.stop()
    profiler.report("profiler.log")

Output looks like this, ordered by time; rows below the second divider ran
too fast to be measured:

    > Total time: 0.255000 s
    --------------------------------------------------------------------------------------
    | FILE                : FUNCTION                    : LINE   : TIME   : %     : #    |
    --------------------------------------------------------------------------------------
    | game/map            : Map.load                    :   301  : 0.1330 : 52.2  :    2 |
    | game/map            : Map.unpack_tile_layer       :   197  : 0.0970 : 38.0  :   36 |
    --------------------------------------------------------------------------------------
    | game/ui             : size_char_limit             :   328  : ~      : ~     :    2 |
    | game/panels         : Anon                        :    42  : ~      : ~     :    1 |
    --------------------------------------------------------------------------------------

The shared session is not thread safe; profile one thread at a time.
"""

from typing import Callable, Optional

from callprof.ProfilerSystem.Session import Session

_session = Session()


def get_session() -> Session:
    return _session


def attach_print_function(print_function: Optional[Callable[[str], None]], verbose: bool = False) -> None:
    _session.attach_print_function(print_function, verbose)


def start() -> None:
    _session.start()


def stop() -> None:
    _session.stop()


def report(filename: str = "profiler.log") -> str:
    return _session.report(filename)
