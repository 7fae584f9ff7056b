from asseter.render.html import attributes_to_string


def test_named_attributes_keep_order() -> None:
    output = attributes_to_string(
        {
            "id": "myTest",
            "title": "This is my test attribute array to attributes.",
            "style": "border: 1px solid green;",
        }
    )

    assert output == 'id="myTest" title="This is my test attribute array to attributes." style="border: 1px solid green;"'


def test_numeric_keys_are_bare_flags_in_html() -> None:
    output = attributes_to_string({"id": "inName", "name": "theName", 0: "autofocus"})

    assert output == 'id="inName" name="theName" autofocus'


def test_numeric_keys_repeat_name_in_xhtml() -> None:
    output = attributes_to_string({"id": "inName", "name": "theName", 0: "disabled"}, True)

    assert output == 'id="inName" name="theName" disabled="disabled"'


def test_none_and_false_are_skipped_but_empty_string_is_kept() -> None:
    output = attributes_to_string({"id": None, "class": False, "title": "", 0: None, "lang": "en"})

    assert output == 'title="" lang="en"'


def test_true_value_is_a_flag() -> None:
    assert attributes_to_string({"checked": True}) == "checked"
    assert attributes_to_string({"checked": True}, xhtml_style=True) == 'checked="checked"'


def test_values_are_not_escaped() -> None:
    assert attributes_to_string({"onclick": "go('<a>')"}) == "onclick=\"go('<a>')\""


def test_sequences_mix_flags_and_pairs() -> None:
    output = attributes_to_string([("type", "checkbox"), "checked", ("name", "agree")])

    assert output == 'type="checkbox" checked name="agree"'


def test_empty_inputs_render_nothing() -> None:
    assert attributes_to_string(None) == ""
    assert attributes_to_string({}) == ""
    assert attributes_to_string([]) == ""


def test_string_is_passed_through() -> None:
    assert attributes_to_string('class="raw"') == 'class="raw"'


def test_scalars_are_passed_through_as_text() -> None:
    assert attributes_to_string(5) == "5"
    assert attributes_to_string(2.5, xhtml_style=True) == "2.5"
