# src/leversguard/cli/codes_handler.py
from typing import List

from leversguard.dom.registry import RuleRegistry


def handle_codes(args: List[str]) -> int:
    """Prints every diagnostic code, grouped by rule set in evaluation order."""
    if args:
        print("Usage: leversguard codes")
        return 2

    for defn in RuleRegistry.get_definitions():
        print(f"{defn.name}:")
        for code in defn.codes:
            print(f"  {code}")
    print(f"\n{len(RuleRegistry.get_all_possible_codes())} codes in total.")
    return 0
