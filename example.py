"""Example usage of the supersetdiff comparison engine."""

from supersetdiff import (
    DiffEngine,
    Difference,
    console_options,
    decimal_equal,
)

# Response returned by the service under test
actual_response = """
{
    "id": "INV-001",
    "total": 100.00,
    "status": "paid",
    "createdAt": "2025-02-02T10:30:02Z",
    "updatedAt": "2025-02-02T11:00:00Z",
    "metadata": {"traceId": "abc123"},
    "lineItems": [
        {"sku": "WIDGET-001", "quantity": 5, "unitPrice": 10.00},
        {"sku": "GADGET-002", "quantity": 2, "unitPrice": 25.50}
    ]
}
"""

# What the test expects: ids only need to exist, extra fields are fine
expected_response = """
{
    "id": "<<PRESENCE>>",
    "total": 100.0,
    "status": "paid",
    "createdAt": "<<PRESENCE>>",
    "lineItems": [
        {"sku": "WIDGET-001", "quantity": 5, "unitPrice": 10.0},
        {"sku": "GADGET-002", "quantity": 2, "unitPrice": 25.5}
    ]
}
"""


def main():
    print("=" * 60)
    print("supersetdiff - Example")
    print("=" * 60)

    # Literal number comparison: 100.00 and 100.0 differ
    engine = DiffEngine(console_options().replace(skip_matches=True))
    result = engine.compare(actual_response, expected_response)
    print(f"\nLiteral numbers: {result.difference}")
    print(result.text)

    # Numeric comparison: extra metadata is the only difference left
    engine = DiffEngine(console_options().replace(compare_numbers=decimal_equal))
    result = engine.compare(actual_response, expected_response)
    print(f"\nDecimal numbers: {result.difference}")
    print(result.text)


def example_with_ignored_paths():
    """Exclude volatile fields from the comparison."""
    print("\n" + "=" * 60)
    print("Example with Ignored Paths")
    print("=" * 60)

    options = console_options().replace(
        compare_numbers=decimal_equal,
        ignore_paths=("$..updatedAt", "$.metadata"),
        print_types=True,
    )
    difference, text = DiffEngine(options).compare(actual_response, expected_response)
    print(f"\nResult: {difference}")
    print(text)

    if difference in (Difference.FULL_MATCH, Difference.SUPERSET_MATCH):
        print("\nAssertion would pass")


if __name__ == "__main__":
    main()
    example_with_ignored_paths()
