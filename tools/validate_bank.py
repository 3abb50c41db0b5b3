from __future__ import annotations
from collections import Counter
import sys
from quiz_core.question_bank import load_bank
from quiz_core.flow import expected_sequence

def main():
    bank = load_bank()
    by_area = Counter(q.skill_area or "-" for q in bank)
    print(f"{len(bank)} questions in linear order.")
    for area, n in sorted(by_area.items()):
        print(f"  {area:<16} {n:2d}")

    root = bank.get(bank.first_id())
    print("\nCanonical paths:")
    for interest in list(root.follow_ups) + ["other"]:
        print(f"  {interest:<10} " + " -> ".join(expected_sequence(interest, bank)))

    issues = bank.audit()
    if issues:
        print(f"\n{len(issues)} issue(s):")
        for line in issues:
            print(f"  ✗ {line}")
        sys.exit(1)
    print("\n  ✓ No authoring issues")

if __name__ == "__main__":
    main()
