import sys

from edufeedback.client.cli import main


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
