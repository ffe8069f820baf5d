"""Allow `python -m topicdrill` to serve the practice page."""

from __future__ import annotations

from .main import run


def main(argv: list[str] | None = None) -> None:
    raise SystemExit(run(argv))


if __name__ == "__main__":  # pragma: no cover
    main()
