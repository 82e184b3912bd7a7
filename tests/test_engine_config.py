import logging
import unittest

import partwire
from partwire.runtime.engine import TemplateEngine
from partwire.runtime.host import HostTree


class TestEngineConfig(unittest.TestCase):
    def setUp(self) -> None:
        self.logger = logging.getLogger("partwire")
        self.level = self.logger.level

    def tearDown(self) -> None:
        self.logger.setLevel(self.level)

    def test_default_config(self) -> None:
        engine = TemplateEngine()
        self.assertEqual(engine.html_parser, "html.parser")
        self.assertEqual(engine.markers.attribute, "data-dtpp-attributes")
        self.assertEqual(engine.markers.nodes, "data-dtpp-nodes")
        self.assertTrue(engine.cache_enabled)
        self.assertEqual(engine.compiler.cache_size, 256)
        self.assertFalse(engine.debug)
        self.assertIsInstance(engine.host, HostTree)

    def test_explicit_config(self) -> None:
        engine = TemplateEngine(
            attribute_marker="data-a",
            node_marker="data-n",
            cache=False,
            cache_size=8,
        )
        template = engine.compile(['<p class="', '">', "</p>"])

        self.assertIn('data-a="class"', template.markup)
        self.assertIn('<span data-n=""></span>', template.markup)
        self.assertFalse(engine.cache_enabled)
        self.assertEqual(engine.compiler.cache_size, 8)
        self.assertEqual(engine.instantiate(template.fragments).render(), '<p class=""></p>')

    def test_custom_host(self) -> None:
        host = HostTree()
        engine = TemplateEngine(host=host)
        self.assertIs(engine.host, host)
        self.assertIs(engine.compile(["<p>", "</p>"]).host, host)

    def test_debug_enables_logging(self) -> None:
        TemplateEngine(debug=True)
        self.assertEqual(self.logger.level, logging.DEBUG)

    def test_debug_logs_compilation(self) -> None:
        engine = TemplateEngine(debug=True)
        with self.assertLogs("partwire.compiler.template", level="DEBUG") as logs:
            engine.compile(["<p>", "</p>"])
        self.assertTrue(any("HTML mode" in line for line in logs.output))

    def test_module_level_compile_uses_default_engine(self) -> None:
        fragments = ["<b>", "</b>"]
        first = partwire.compile(fragments)
        self.assertIs(partwire.compile(fragments), first)
        self.assertIs(partwire.get_engine(), partwire.get_engine())
        self.assertIsInstance(first, partwire.StaticTemplate)


if __name__ == "__main__":
    unittest.main()
