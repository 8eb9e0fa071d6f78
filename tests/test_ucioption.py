import pytest

from fishcore.ucioption import (
    DuplicateOptionError,
    Option,
    OptionsMap,
    OptionType,
    case_insensitive_key,
)


def make_map(button_calls=None):
    calls = button_calls if button_calls is not None else []
    options = OptionsMap()
    options.add("Hash", Option.spin(16, 1, 1024))
    options.add("Ponder", Option.check(False))
    options.add("Debug Log File", Option.string(""))
    options.add("Clear Hash", Option.button(lambda o: calls.append(o.type) or None))
    options.add("Style", Option.combo("Normal var Solid var Normal var Risky", "Normal"))
    return options


def test_case_insensitive_key():
    assert case_insensitive_key("Hash") == case_insensitive_key("hASH")


def test_lookup_is_case_insensitive():
    options = make_map()
    assert options["hash"] is options["HASH"]
    assert "pONDER" in options
    assert "Threads" not in options


def test_missing_option_raises_key_error():
    with pytest.raises(KeyError):
        make_map()["Threads"]


def test_duplicate_add_raises():
    options = make_map()
    with pytest.raises(DuplicateOptionError):
        options.add("hash", Option.spin(1, 1, 2))


def test_len_counts_options():
    assert len(make_map()) == 5


def test_spin_initial_value():
    assert int(make_map()["Hash"]) == 16


def test_spin_in_range_is_set():
    options = make_map()
    options.setoption("name Hash value 64")
    assert int(options["Hash"]) == 64


def test_spin_out_of_range_is_ignored():
    options = make_map()
    options.setoption("name Hash value 2048")
    options.setoption("name Hash value 0")
    assert int(options["Hash"]) == 16


def test_empty_value_ignored_for_spin():
    options = make_map()
    options.setoption("name Hash value")
    assert int(options["Hash"]) == 16


def test_spin_non_numeric_raises():
    options = make_map()
    with pytest.raises(ValueError):
        options.setoption("name Hash value lots")


def test_check_values():
    options = make_map()
    assert int(options["Ponder"]) == 0
    options.setoption("name Ponder value true")
    assert int(options["Ponder"]) == 1
    options.setoption("name Ponder value yes")
    assert int(options["Ponder"]) == 1


def test_string_with_spaces_and_empty_marker():
    options = make_map()
    options.setoption("name Debug Log File value my log.txt")
    assert str(options["Debug Log File"]) == "my log.txt"
    options.setoption("name Debug Log File value <empty>")
    assert str(options["Debug Log File"]) == ""


def test_combo_accepts_member_case_insensitively():
    options = make_map()
    options.setoption("name Style value risky")
    assert options["Style"].matches("RISKY")
    assert not options["Style"].matches("Normal")


def test_combo_rejects_var_and_unknown():
    options = make_map()
    options.setoption("name Style value var")
    options.setoption("name Style value Wild")
    assert options["Style"].matches("Normal")


def test_button_triggers_on_change():
    calls = []
    options = make_map(calls)
    options.setoption("name Clear Hash")
    assert calls == [OptionType.BUTTON]


def test_unknown_option_reported(capsys):
    options = make_map()
    options.setoption("name Nope Thing value 3")
    assert capsys.readouterr().out == "No such option: Nope Thing\n"


def test_info_listener_receives_on_change_message():
    received = []
    options = OptionsMap()
    options.add_info_listener(received.append)
    options.add("Loud", Option.check(False, lambda o: f"now {o.current_value}"))
    options.add("Quiet", Option.check(False, lambda o: None))
    options.setoption("name Loud value true")
    options.setoption("name Quiet value true")
    assert received == ["now true"]


def test_assign_returns_option():
    option = Option.spin(5, 0, 10)
    assert option.assign("7") is option
    assert int(option) == 7


def test_int_of_string_option_raises():
    with pytest.raises(TypeError):
        int(Option.string("x"))


def test_matches_on_non_combo_raises():
    with pytest.raises(TypeError):
        Option.spin(1, 0, 2).matches("1")


def test_render():
    expected = (
        "\noption name Hash type spin default 16 min 1 max 1024"
        "\noption name Ponder type check default false"
        "\noption name Debug Log File type string default <empty>"
        "\noption name Clear Hash type button"
        "\noption name Style type combo default Normal var Solid var Normal var Risky"
    )
    assert make_map().render() == expected


def test_render_keeps_default_after_change():
    options = make_map()
    options.setoption("name Hash value 64")
    assert "default 16 min 1 max 1024" in options.render()