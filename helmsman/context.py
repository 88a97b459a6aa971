"""
Execution context and output sinks.

A command never touches the real process streams. It writes to two Sink
buffers owned by the engine, which flushes them exactly once after run()
returns. A command that fails halfway therefore leaves no partial output:
the buffers are dropped and only the fault report is shown.
"""
import io
from pathlib import Path


class Sink:
    """
    In-memory text buffer handed to commands as stdout/stderr.

    Supports write() like a text stream and print() like the builtin.
    """
    __slots__ = ("_buffer", "_flushed")

    def __init__(self):
        self._buffer = io.StringIO()
        self._flushed = False

    def write(self, text, /):
        if self._flushed:
            raise ValueError("write to a sink that was already flushed")
        return self._buffer.write(text)

    def print(self, *objects, sep=" ", end="\n"):
        self.write(sep.join(map(str, objects)) + end)

    def getvalue(self):
        return self._buffer.getvalue()

    def flush_to(self, stream, /):
        """
        Copy the buffered text to `stream` once; later writes are rejected.
        """
        if self._flushed:
            raise ValueError("sink was already flushed")
        self._flushed = True
        if text := self._buffer.getvalue():
            stream.write(text)
            stream.flush()

    @property
    def flushed(self):
        return self._flushed

    def __len__(self):
        return len(self._buffer.getvalue())


class ExecutionContext:
    """
    Bundle passed to Command.run(): cwd (read-only Path), stdout and stderr sinks.
    """
    __slots__ = ("_cwd", "_stdout", "_stderr")

    def __init__(self, cwd, stdout, stderr):
        self._cwd = Path(cwd)
        self._stdout = stdout
        self._stderr = stderr

    @property
    def cwd(self):
        return self._cwd

    @property
    def stdout(self):
        return self._stdout

    @property
    def stderr(self):
        return self._stderr

    def __repr__(self):
        return "execution-context(cwd=%r)" % str(self._cwd)


__all__ = (
    "Sink",
    "ExecutionContext",
)
