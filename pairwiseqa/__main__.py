"""Allow running as ``python -m pairwiseqa``."""

from pairwiseqa.cli import main

if __name__ == "__main__":
    main()
