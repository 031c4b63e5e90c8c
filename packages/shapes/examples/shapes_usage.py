"""Examples of composing descriptors and reading their failure reports."""

import logging

from dataknobs_shapes import (
    DecodeError,
    array,
    create_message,
    number,
    object_type,
    string,
    type_factory,
)


def example_1_fluent_api():
    """Example composing descriptors in code."""
    line = object_type(
        {"sku": string().regex(r"[A-Z]{3}-\d+"), "quantity": number().integer().positive()},
        {"note": string()},
        name="Line",
    ).strict()
    order = object_type({"id": number().integer(), "lines": array(line)}, name="Order").violet()

    result = order.decode({
        "id": 7,
        "lines": [{"sku": "ABC-1", "quantity": 2}, {"sku": "x", "quantity": 0, "gift": True}],
        "source": "web",
    })
    print(create_message(result))


def example_2_alternation():
    """Example accepting a string or a numeric string."""
    amount = number().parse_float().min(0).allow(string().regex("n/a"))

    print("Decoded:", amount.decode("12.5").value)
    print("Decoded:", amount.decode("n/a").value)
    print(create_message(amount.decode("-3")))


def example_3_config_based():
    """Example building a descriptor from configuration."""
    config = {
        "type": "object",
        "name": "Reading",
        "required": {
            "sensor": {"type": "string"},
            "values": {"type": "array", "items": {"type": "number", "constraints": ["finite"]}},
        },
    }
    reading = type_factory.create(**config)

    try:
        reading.check({"sensor": "t1", "values": [1.5, "hot"]})
    except DecodeError as e:
        print(e)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    print("Example 1: Fluent API")
    example_1_fluent_api()

    print("\nExample 2: Alternation")
    example_2_alternation()

    print("\nExample 3: Config-based")
    example_3_config_based()
