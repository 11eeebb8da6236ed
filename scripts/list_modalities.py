#!/usr/bin/env python3
"""
List the modalities the service would register at startup.

Usage:
    python scripts/list_modalities.py                # All modalities
    python scripts/list_modalities.py headache       # Modalities for an indication
"""

import os
import sys

from dotenv import load_dotenv
load_dotenv()

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))
from treatment_modalities.api import create_state, run_async


def main():
    state = create_state()
    run_async(state.loader.load_all_plugins())

    status = state.loader.get_loading_status()
    for error in status["errors"]:
        print(f"❌ {error}")

    if len(sys.argv) > 1:
        indication = sys.argv[1]
        rows = state.composer.generate_comparison_data(indication)
        print(f"\nFound {len(rows)} modality(ies) for '{indication}':\n")
        for i, row in enumerate(rows, 1):
            print(f"{i}. {row['icon']} {row['name']}")
            print(f"   Protocols: {row['protocols']}")
            print(f"   Effectiveness: {row['effectiveness']}")
            print()
        return

    plugins = state.registry.get_all()
    print(f"\nFound {len(plugins)} modality(ies):\n")
    for i, plugin in enumerate(plugins, 1):
        summary = plugin.summary()
        print(f"{i}. {summary['icon']} {summary['display_name']} ({summary['id']})")
        print(f"   Category: {summary['category']}")
        print(f"   Protocols: {summary['protocols']}")
        print(f"   Techniques: {summary['techniques']}")
        print()

    print(f"📊 {state.registry.get_stats()}")


if __name__ == "__main__":
    main()
