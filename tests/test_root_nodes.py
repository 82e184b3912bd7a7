import pytest

from partwire.runtime.node_range import BoundaryError
from partwire.runtime.processor import values_processor

LIST = ("<ul>", "</ul>")
ITEM = ("<li>", "</li>")
PAIR = ("<b></b>", "<i></i>")


def test_nested_instance_stays_live(engine):
    inner = engine.compile(ITEM).instantiate(values_processor, ["one"])
    outer = engine.compile(LIST).instantiate(values_processor, [inner])

    assert outer.render() == "<ul><li>one</li></ul>"
    assert len(inner.fragment.contents) == 0

    inner.update(["two"])

    assert outer.render() == "<ul><li>two</li></ul>"
    assert inner.render() == "<li>two</li>"


def test_multi_root_instance_tracks_growth(engine):
    inner = engine.compile(PAIR).instantiate()
    outer = engine.compile(LIST).instantiate(values_processor, [inner])
    # <b>, both boundary nodes and <i>
    assert len(inner.root_nodes) == 4

    inner.parts[0].replace_with("mid", "more")

    assert len(inner.root_nodes) == 6
    assert outer.render() == "<ul><b></b>midmore<i></i></ul>"
    assert inner.root_nodes[0].name == "b"
    assert inner.root_nodes.item(5).name == "i"
    assert inner.root_nodes.item(6) is None


def test_splicing_same_instance_again_mutates_nothing(engine, host):
    inner = engine.compile(PAIR).instantiate()
    outer = engine.compile(LIST).instantiate(values_processor, [inner])
    inner.parts[0].replace_with("mid")

    host.reset()
    outer.parts[0].replace_with(inner)

    assert host.mutations == 0
    assert outer.render() == "<ul><b></b>mid<i></i></ul>"


def test_separated_root_nodes_raise(engine):
    inner = engine.compile(PAIR).instantiate()
    inner.root_nodes.first.extract()

    with pytest.raises(BoundaryError, match="no longer adjacent"):
        list(inner.root_nodes)


def test_empty_template_has_no_root_nodes(engine):
    instance = engine.compile([""]).instantiate()

    assert len(instance.root_nodes) == 0
    assert instance.render() == ""


def test_dropped_instance_can_be_placed_again(engine):
    inner = engine.compile(PAIR).instantiate()
    inner.parts[0].replace_with("mid")
    outer = engine.compile(LIST).instantiate()
    part = outer.parts[0]

    part.replace_with(inner)
    part.replace_with()

    assert outer.render() == "<ul></ul>"
    assert inner.render() == "<b></b>mid<i></i>"
    assert len(inner.fragment.contents) == 5

    part.replace_with(inner)

    assert outer.render() == "<ul><b></b>mid<i></i></ul>"
    assert len(inner.fragment.contents) == 0


def test_dropped_text_of_nested_instance_is_not_reused(engine):
    inner = engine.compile(PAIR).instantiate()
    inner.parts[0].replace_with("mid")
    outer = engine.compile(LIST).instantiate()
    outer.parts[0].replace_with(inner)

    outer.parts[0].replace_with("mid")

    assert outer.render() == "<ul>mid</ul>"
    assert inner.render() == "<b></b>mid<i></i>"


def test_filtering_nested_instances_with_processor(engine):
    items = [
        engine.compile(ITEM).instantiate(values_processor, [text]) for text in "ab"
    ]
    outer = engine.compile(LIST).instantiate(values_processor, [items])
    assert outer.render() == "<ul><li>a</li><li>b</li></ul>"

    outer.update([[items[1]]])
    assert outer.render() == "<ul><li>b</li></ul>"
    assert items[0].render() == "<li>a</li>"

    outer.update([[]])
    outer.update([items])
    assert outer.render() == "<ul><li>a</li><li>b</li></ul>"


def test_instance_moved_to_another_range_stays_there(engine):
    inner = engine.compile(ITEM).instantiate(values_processor, ["x"])
    first = engine.compile(LIST).instantiate(values_processor, [inner])
    second = engine.compile(LIST).instantiate(values_processor, [inner])

    first.update([None])

    assert first.render() == "<ul></ul>"
    assert second.render() == "<ul><li>x</li></ul>"
