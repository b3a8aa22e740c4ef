"""Entry point for Tessera."""

import sys
from pathlib import Path

from .app import run_app
from .config import Config


def main() -> int:
    """Main entry point for Tessera."""
    try:
        # Load configuration
        config = Config.load()

        # Optional folder argument overrides the configured start folder
        start_directory = Path(sys.argv[1]) if len(sys.argv) > 1 else None

        # Run the application
        run_app(config, start_directory)

        return 0
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
