# snapwatch/__main__.py
from . import cli


def main() -> None:
    raise SystemExit(cli.main())


if __name__ == "__main__":
    main()
