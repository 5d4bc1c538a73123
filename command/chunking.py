"""
Splitting of long replies into transport-sized parts.
"""


def split_into_parts(text: str, max_length: int) -> list[str]:
    """
    Split text into consecutive parts of at most max_length characters.

    Every part except possibly the last is exactly max_length long, so the
    number of parts is minimal. An empty string yields no parts.

    Example:
        split_into_parts("abcdefg", 3) -> ["abc", "def", "g"]

    Raises:
        ValueError: If max_length is not positive
    """
    if max_length < 1:
        raise ValueError(f"max_length must be positive, got {max_length}")
    return [text[i:i + max_length] for i in range(0, len(text), max_length)]
