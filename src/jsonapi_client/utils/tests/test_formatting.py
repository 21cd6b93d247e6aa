from ..formatting import english_enumerate


def test_english_enumerate():
    assert english_enumerate([]) == ""
    assert english_enumerate(["a"]) == "a"
    assert english_enumerate(["a", "b"]) == "a or b"
    assert english_enumerate(["a", "b", "c"]) == "a, b, or c"
    assert english_enumerate(["a", "b", "c"], conj=", and ") == "a, b, and c"
    assert english_enumerate(["a", "b"], quote='"') == '"a" or "b"'
