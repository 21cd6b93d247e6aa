import typing


def english_enumerate(
    items: typing.Iterable[str], conj: str = ", or ", quote: typing.Optional[str] = None
) -> str:
    """
    Joins ``items`` the way one would in an English sentence.

    >>> english_enumerate(["str", "int", "None"])
    'str, int, or None'
    """
    buf = [f"{quote}{x}{quote}" if quote is not None else x for x in items]
    if len(buf) < 2:
        return "".join(buf)
    if len(buf) == 2:
        return f"{buf[0]}{conj.lstrip(',')}{buf[1]}"
    return ", ".join(buf[:-1]) + conj + buf[-1]
