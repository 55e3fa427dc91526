import pytest

from tagtree import MetadataLoadError, TagMetadata, TreeBuilder, UnbalancedTagError, build_tree, tokenize


def _shape(element):
    return (element.name, tuple(_shape(child) for child in element.children))


def _build(html, **kwargs):
    return build_tree(tokenize(html), **kwargs)


def test_nested_tree_and_class_extraction():
    root = _build('<div><p class="a"><span></span></p></div>')
    assert root.is_root
    (div,) = root.children
    (p,) = div.children
    (span,) = p.children
    assert [div.tag_name, p.tag_name, span.tag_name] == ["div", "p", "span"]
    assert p.name == '<p class="a">'
    assert p.classes == ["a"]
    assert span.children == []
    assert span.parent is p
    assert list(span.ancestors()) == [p, div, root]


def test_balanced_tags_give_one_element_per_open_tag():
    root = _build("<a><b><c></c></b><d></d></a>")
    elements = list(root.descendants())
    assert len(elements) == 4
    depths = {element.tag_name: element.depth() for element in elements}
    assert depths == {"a": 1, "b": 2, "c": 3, "d": 2}


def test_void_tag_does_not_take_children():
    root = _build("<div><br><span></span></div>")
    (div,) = root.children
    br, span = div.children
    assert br.tag_name == "br"
    assert br.children == []
    assert span.parent is div


def test_trailing_slash_makes_any_tag_self_closing():
    root = _build("<div><custom/><p></p></div>")
    (div,) = root.children
    assert [child.tag_name for child in div.children] == ["custom", "p"]
    assert div.children[0].children == []


def test_doctype_and_comments_never_open_a_scope():
    root = _build("<!DOCTYPE html><html><!-- c --><body></body></html>")
    assert [child.tag_name for child in root.children] == ["!doctype", "html"]
    html = root.children[1]
    assert [child.tag_name for child in html.children] == ["!--", "body"]


def test_extra_end_tag_raises():
    with pytest.raises(UnbalancedTagError) as excinfo:
        _build("<div></div></div>")
    assert excinfo.value.index == 2
    assert excinfo.value.token == "</div>"
    assert "</div>" in str(excinfo.value)


def test_leading_end_tag_raises():
    with pytest.raises(UnbalancedTagError) as excinfo:
        _build("</p><p></p>")
    assert excinfo.value.index == 0


def test_end_tag_names_are_not_checked():
    root = _build("<div><span></div></span>")
    (div,) = root.children
    (span,) = div.children
    assert span.tag_name == "span"


def test_unclosed_elements_stay_attached():
    root = _build("<div><p>")
    (div,) = root.children
    (p,) = div.children
    assert p.children == []


def test_same_input_builds_the_same_tree():
    html = '<ul class="menu"><li>one</li><li>two<br></li></ul><img src="x">'
    first = _build(html)
    second = _build(html)
    assert first is not second
    assert _shape(first) == _shape(second)
    assert [e.name for e in first.descendants()] == [e.name for e in second.descendants()]


def test_builder_can_be_reused():
    builder = TreeBuilder()
    first = builder.build(["<div>", "</div>"])
    second = builder.build(["<p>"])
    assert [child.tag_name for child in first.children] == ["div"]
    assert [child.tag_name for child in second.children] == ["p"]


def test_builder_recovers_after_error():
    builder = TreeBuilder()
    with pytest.raises(UnbalancedTagError):
        builder.build(["</div>"])
    root = builder.build(["<div>", "</div>"])
    assert len(root.children) == 1


def test_id_attributes_and_classes():
    root = _build('<p id="x" class="a b a" hidden>')
    (p,) = root.children
    assert p.id == "x"
    assert p.classes == ["a", "b"]
    assert p.attributes == ['id="x"', 'class="a b a"', "hidden"]


def test_attribute_extraction_can_be_disabled():
    root = TreeBuilder(extract_attributes=False).build(['<p id="x" class="a">'])
    (p,) = root.children
    assert p.id is None
    assert p.classes == []
    assert p.attributes == []


def test_injected_metadata_decides_self_closing():
    metadata = TagMetadata({"x", "y"}, {"x"})
    root = _build("<x><y></y>", tag_metadata=metadata)
    assert [child.tag_name for child in root.children] == ["x", "y"]


def test_inner_html_is_left_unset():
    root = _build("<p>text</p>")
    assert root.children[0].inner_html is None


def test_default_metadata_failure_propagates(tmp_path, monkeypatch):
    missing = tmp_path / "missing.json"
    monkeypatch.setattr(TagMetadata, "default", staticmethod(lambda: TagMetadata.load(missing)))
    with pytest.raises(MetadataLoadError) as excinfo:
        TreeBuilder()
    assert excinfo.value.path == str(missing)
    with pytest.raises(MetadataLoadError):
        build_tree(["<p>"])
