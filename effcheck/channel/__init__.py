"""
The effect channel.

Generator code performs effects by yielding them; the innermost visible
handler installed with ``WithHandler`` answers. Handlers are plain callables:
a returned value answers the effect, a returned program runs as the handler
body (and may delegate outward by performing the effect again), and a
returned ``Abort`` ends the dynamic extent of the ``WithHandler`` that
installed the handler.
"""

from effcheck.channel.frames import (
    DispatchFrame,
    Handler,
    HandlerFrame,
    LabelFrame,
    ReturnFrame,
)
from effcheck.channel.machine import Machine, format_kontinuation, run_program
from effcheck.channel.primitives import (
    Abort,
    ControlPrimitive,
    WithHandler,
    WithLabel,
    label,
    perform,
    with_handler,
)

__all__ = [
    "Abort",
    "ControlPrimitive",
    "DispatchFrame",
    "Handler",
    "HandlerFrame",
    "LabelFrame",
    "Machine",
    "ReturnFrame",
    "WithHandler",
    "WithLabel",
    "format_kontinuation",
    "label",
    "perform",
    "run_program",
    "with_handler",
]
