import unittest

from partwire.compiler.template import TemplateCompiler
from partwire.runtime.parts import AttributePart, ElementPart, NodeRangePart, PartType


def set_attributes_only(instance, values):
    for part, value in zip(instance.parts, values):
        if part.part_type is PartType.ATTRIBUTE_PART:
            part.value = value


class TestMaterialize(unittest.TestCase):
    def setUp(self) -> None:
        self.compiler = TemplateCompiler()

    def test_attribute_then_empty_node_range(self) -> None:
        template = self.compiler.compile(['<p class="', '">', "</p>"])
        instance = template.instantiate(set_attributes_only, ["a", "ignored"])

        self.assertEqual(instance.render(), '<p class="a"></p>')
        self.assertEqual(len(instance.parts[1].nodes), 0)
        self.assertEqual(instance.arguments, ["a", "ignored"])

    def test_instances_are_independent(self) -> None:
        template = self.compiler.compile(['<p class="', '"></p>'])
        static_markup = str(template.fragment)

        first = template.instantiate()
        second = template.instantiate()
        first.parts[0].value = "one"

        self.assertEqual(first.parts[0].value, "one")
        self.assertEqual(second.parts[0].value, "")
        self.assertIsNot(first.parts[0].element, second.parts[0].element)
        self.assertEqual(str(template.fragment), static_markup)

    def test_marker_attributes_are_stripped(self) -> None:
        instance = self.compiler.compile(['<input value="', '" ', ">"]).instantiate()
        element = instance.parts[0].element
        self.assertNotIn("data-dtpp-attributes", element.attrs)
        self.assertNotIn("data-dtpp", instance.render())

    def test_element_part(self) -> None:
        instance = self.compiler.compile(["<input ", ">"]).instantiate()
        (part,) = instance.parts
        self.assertIsInstance(part, ElementPart)
        self.assertIs(part.part_type, PartType.ELEMENT_PART)
        self.assertEqual(part.element.name, "input")

    def test_repeated_attribute_shares_one_part(self) -> None:
        template = self.compiler.compile(['<p class="a ', " ", ' b">', "</p>"])
        parts = template.instantiate().parts
        self.assertEqual(len(parts), 3)
        self.assertIsInstance(parts[0], AttributePart)
        self.assertIs(parts[0], parts[1])
        self.assertIsInstance(parts[2], NodeRangePart)

    def test_repeated_element_holes_share_one_part(self) -> None:
        parts = self.compiler.compile(["<input ", " ", ">"]).instantiate().parts
        self.assertEqual(len(parts), 2)
        self.assertIs(parts[0], parts[1])

    def test_node_range_marker_becomes_adjacent_sentinels(self) -> None:
        instance = self.compiler.compile(["<ul>", "</ul>"]).instantiate()
        nodes = instance.parts[0].nodes
        self.assertIs(nodes.start.next_sibling, nodes.end)
        self.assertEqual(instance.parts[0].parent.name, "ul")
        self.assertEqual(instance.render(), "<ul></ul>")

    def test_attribute_value_none_removes_attribute(self) -> None:
        instance = self.compiler.compile(['<p title="', '"></p>']).instantiate()
        part = instance.parts[0]
        part.value = None
        self.assertIsNone(part.value)
        self.assertNotIn("title", part.element.attrs)
        part.value = "back"
        self.assertEqual(part.element["title"], "back")
        with self.assertRaises(TypeError):
            part.value = 3

    def test_processor_runs_on_instantiate_and_update(self) -> None:
        calls = []

        def processor(instance, arguments):
            calls.append(arguments)
            instance.parts[0].replace_with(*arguments)

        instance = self.compiler.compile(["<b>", "</b>"]).instantiate(processor, ["x"])
        self.assertEqual(calls, [["x"]])
        self.assertEqual(instance.render(), "<b>x</b>")

        instance.update(["y", "z"])
        self.assertEqual(calls, [["x"], ["y", "z"]])
        self.assertEqual(instance.arguments, ["y", "z"])
        self.assertEqual(instance.render(), "<b>yz</b>")

    def test_update_without_processor(self) -> None:
        instance = self.compiler.compile(["<b>", "</b>"]).instantiate()
        self.assertIsNone(instance.processor)
        with self.assertRaises(TypeError):
            instance.update(["x"])


class TestPartList(unittest.TestCase):
    def setUp(self) -> None:
        template = TemplateCompiler().compile(['<a href="', '">', "</a>"])
        self.parts = template.instantiate().parts

    def test_indexing_and_iteration(self) -> None:
        self.assertEqual(len(self.parts), 2)
        self.assertEqual(list(self.parts), [self.parts[0], self.parts[1]])
        self.assertIs(self.parts[-1], self.parts[1])

    def test_item_returns_none_out_of_range(self) -> None:
        self.assertIs(self.parts.item(0), self.parts[0])
        self.assertIsNone(self.parts.item(2))
        self.assertIsNone(self.parts.item(-1))
        with self.assertRaises(IndexError):
            self.parts[2]

    def test_keys_values_entries(self) -> None:
        self.assertEqual(list(self.parts.keys()), [0, 1])
        self.assertEqual(list(self.parts.values()), list(self.parts))
        self.assertEqual(
            list(self.parts.entries()), [(0, self.parts[0]), (1, self.parts[1])]
        )


if __name__ == "__main__":
    unittest.main()
