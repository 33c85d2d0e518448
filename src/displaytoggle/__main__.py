"""Module entrypoint for `python -m displaytoggle`."""

try:
    from .cli import run
except ImportError:
    from displaytoggle.cli import run


if __name__ == "__main__":
    raise SystemExit(run())
