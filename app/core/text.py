def replace_lone_surrogates(value: str) -> str:
    """
    JSON allows escaped unpaired surrogates ("\\ud800") that cannot be
    encoded as UTF-8. Swaps each one for U+FFFD; other text is unchanged.
    """
    return value.encode("utf-16", "surrogatepass").decode("utf-16", "replace")
