"""Allow ``python -m price_sampler``."""
from .cli import main

if __name__ == "__main__":
    main()
