#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from vestview.config.loader import ConfigLoader
from vestview.config.validation import ConfigValidator, ValidationError


def validate_network_config(prefix: int) -> List[ValidationError]:
    """Validate configuration for a specific network prefix."""
    loader = ConfigLoader.create()
    config = loader.merge_config(prefix)
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    print("Validating vestview configuration...")

    loader = ConfigLoader.create()

    # Every prefix with a relay endpoint, plus one that should use defaults
    prefixes = sorted(loader.defaults.relay.endpoints) + [0]

    all_valid = True

    for prefix in prefixes:
        print(f"\nValidating network prefix {prefix}...")

        try:
            errors = validate_network_config(prefix)

            if errors:
                print(f"Found {len(errors)} validation errors:")
                for error in errors:
                    print(f"  - {error.field}: {error.message} (value: {error.value})")
                all_valid = False
            else:
                print(f"Prefix {prefix} configuration is valid")

        except Exception as e:
            print(f"Error validating prefix {prefix}: {e}")
            all_valid = False

    if all_valid:
        print("\nAll configuration validation passed!")
        sys.exit(0)
    else:
        print("\nConfiguration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
