from interfacery.inference.tokenizer import tokenize


def test_tokenize_camel_case_with_trailing_acronym():
    assert tokenize("GetUserByID") == ["Get", "User", "By", "ID"]


def test_tokenize_empty_identifier_yields_single_empty_word():
    assert tokenize("") == [""]


def test_tokenize_acronym_followed_by_word():
    assert tokenize("GetOrderByUserIDAndOrderID") == [
        "Get", "Order", "By", "User", "ID", "And", "Order", "ID",
    ]
    assert tokenize("HTTPServer") == ["HTTP", "Server"]


def test_tokenize_preserves_case_and_single_words():
    assert tokenize("lowercase") == ["lowercase"]
    assert tokenize("getUser") == ["get", "User"]
    assert tokenize("Word") == ["Word"]


def test_tokenize_digit_then_upper_starts_new_word():
    assert tokenize("V2Users") == ["V2", "Users"]


def test_tokenize_acronym_run_keeps_last_capital_with_following_word():
    # the final capital of a run starts the next word
    assert tokenize("IDentifier") == ["I", "Dentifier"]
    assert tokenize("GetUsersByIDs") == ["Get", "Users", "By", "I", "Ds"]
