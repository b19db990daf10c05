"""Console logger used by the CLI, the HTTP app and the demo."""

class ConsoleLogger:
    """Simple console logger implementing the Logger protocol."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def _emit(self, level: str, msg: str, kv):
        if self.quiet and level != "ERROR":
            return
        details = " ".join(f"{k}={v}" for k, v in kv.items())
        print(f"{level}: {msg} {details}" if details else f"{level}: {msg}")

    def info(self, msg: str, **kv):
        self._emit("INFO", msg, kv)

    def warn(self, msg: str, **kv):
        self._emit("WARN", msg, kv)

    def error(self, msg: str, **kv):
        self._emit("ERROR", msg, kv)
