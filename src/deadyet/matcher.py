from deadyet.hexdigits import decode


def contains_pattern(number, pattern) -> bool:
    """Check whether the hex digits of `pattern` appear in the hex digits of `number`.

    No zero padding is assumed on either side, so a pattern with more digits
    than the number never matches.
    """
    number_digits = decode(number)
    pattern_digits = decode(pattern)
    possible_starts = len(number_digits) - len(pattern_digits) + 1
    if possible_starts <= 0:
        return False

    pattern_len = len(pattern_digits)
    for start in range(possible_starts):
        if number_digits[start:start + pattern_len] == pattern_digits:
            return True
    return False
