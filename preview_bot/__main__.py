"""Allow ``python -m preview_bot``."""

from .cli import run

if __name__ == "__main__":
    run()
