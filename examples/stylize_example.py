"""
Example demonstrating apply_to_ranges() and clear().

This example styles a few ranges of a small fragment whose text is split
across nested elements, shows which nodes received the style, and then
removes the style again.
"""

from text_stylization import TextStylization, parse_html


def main():
    """Demonstrate styling and clearing ranges."""
    root = parse_html('<p>Hello, <b>wide</b> world<span>!</span></p>')
    print("=" * 60)
    print("TextStylization Example")
    print("=" * 60)
    print(f"\nText: {root.text_content!r}")
    print(f"Markup: {root.outer_html}")

    # Example 1: A range crossing an element boundary
    print("\n1. Style 'lo, wi' (3:9):")
    styler = TextStylization(root, "highlight")
    groups = styler.apply_to_ranges([(3, 9)])
    for node in groups[0]:
        print(f"   styled {node.text_content!r}")
    print(f"   {root.outer_html}")

    # Example 2: A whole node that is its parent's only child
    print("\n2. Style '!' (16:17):")
    styler.apply_to_ranges([(16, 17)])
    print(f"   {root.outer_html}")

    # Example 3: A second style nested inside the first
    print("\n3. Style 'wi' with another class (7:9):")
    TextStylization(root, "underline").apply_to_ranges([(7, 9)])
    print(f"   {root.outer_html}")

    # Example 4: Remove the first style
    print("\n4. Clear 'highlight':")
    count = styler.clear()
    print(f"   cleared {count} element(s)")
    print(f"   {root.outer_html}")
    print(f"   text unchanged: {root.text_content!r}")


if __name__ == "__main__":
    main()
