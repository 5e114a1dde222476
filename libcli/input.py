"""
libcli interactive input helpers.

Each helper prints a message followed by a prompt (through a rich console, on
stdout unless another console is given) and then reads from stdin.

- read_line(message, prompt): one line, trailing newline included ("" at EOF).
- read_all(message, prompt): everything until EOF.
- read_num(num_bytes, message, prompt): exactly num_bytes raw bytes decoded as
  UTF-8; raises UnicodeDecodeError on invalid data and EOFError when stdin ends
  early. num_bytes counts bytes, not characters.

message and prompt are kept apart because the message usually varies while the
prompt stays the same ("> ").
"""
import logging
import sys

from rich.console import Console
from rich.text import Text

logger = logging.getLogger(__name__)


def _prompt(message, prompt, console, /):
    if not isinstance(message, str) or not isinstance(prompt, str):
        raise TypeError("message and prompt must be strings")
    console = console or Console()
    # Text keeps rich markup in user messages literal.
    console.print(Text(message + prompt), end="", soft_wrap=True)


def read_line(message, prompt, /, *, console=None, stream=None):
    """
    Prompt, then return one line read from stream (stdin by default).
    """
    _prompt(message, prompt, console)
    return (stream or sys.stdin).readline()


def read_all(message, prompt, /, *, console=None, stream=None):
    """
    Prompt, then return the rest of stream (stdin by default).
    """
    _prompt(message, prompt, console)
    return (stream or sys.stdin).read()


def read_num(num_bytes, message, prompt, /, *, console=None, stream=None):
    """
    Prompt, then read exactly num_bytes from the binary stream (stdin's buffer
    by default) and decode them as strict UTF-8.
    """
    if isinstance(num_bytes, bool) or not isinstance(num_bytes, int):
        raise TypeError("read_num() num_bytes must be an integer")
    if num_bytes < 0:
        raise ValueError("read_num() num_bytes cannot be negative")

    _prompt(message, prompt, console)
    stream = stream or sys.stdin.buffer
    data = b""
    while len(data) < num_bytes:
        if not (chunk := stream.read(num_bytes - len(data))):
            raise EOFError("stdin ended after %d of %d bytes" % (len(data), num_bytes))
        data += chunk
    logger.debug("read %d bytes from stdin", len(data))
    return data.decode("utf-8", errors="strict")


__all__ = (
    "read_line",
    "read_all",
    "read_num",
)
