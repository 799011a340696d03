import sys


# ─── Colors ───────────────────────────────────────────────────────────────────
class Colors:
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'


def _paint(text, color, stream):
    if not getattr(stream, "isatty", lambda: False)():
        return text
    return f"{color}{text}{Colors.ENDC}"


def error(message, stream=None):
    stream = stream or sys.stderr
    print(f"{_paint('Error:', Colors.FAIL, stream)} {message}", file=stream)


def warn(message, stream=None):
    stream = stream or sys.stderr
    print(f"{_paint('Warning:', Colors.WARNING, stream)} {message}", file=stream)


def success(message, stream=None):
    stream = stream or sys.stdout
    print(message, file=stream)
