from xftmpl.directives import DirectiveState, apply_directive


def test_name_and_size_directives():
    state = DirectiveState()

    assert apply_directive(b"pragma xftmpl name gTemplates", state)
    assert apply_directive(b"pragma\txftmpl\tsize  gTemplatesSize\r", state)

    assert state == DirectiveState(var_name="gTemplates", size_name="gTemplatesSize")


def test_first_occurrence_wins():
    state = DirectiveState(var_name="FromOptions")

    assert not apply_directive("pragma xftmpl name FromFile", state)
    assert state.var_name == "FromOptions"


def test_other_shapes_are_ignored():
    state = DirectiveState()

    for line in (
        "",
        "pragma",
        "pragma xftmpl",
        "pragma xftmpl name",
        "pragma xftmpl colour blue",
        "pragma other name Foo",
        "define xftmpl name Foo",
        " pragma  XFTMPL name Foo",
    ):
        assert not apply_directive(line, state)

    assert state == DirectiveState()
