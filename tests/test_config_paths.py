from kunfig.config.paths import SEPARATOR, split_path


def test_separator_is_dot():
    assert SEPARATOR == "."


def test_split_flat_key():
    assert split_path("app") == ("app", None)
    assert split_path("") == ("", None)


def test_split_at_first_separator():
    assert split_path("app.db.host") == ("app", "db.host")


def test_split_keeps_empty_segments():
    assert split_path("app.") == ("app", "")
    assert split_path(".host") == ("", "host")
    assert split_path("a..b") == ("a", ".b")
