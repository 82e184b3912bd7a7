import pytest

from partwire.runtime.engine import TemplateEngine
from partwire.runtime.host import HostTree


class CountingHost(HostTree):
    """Host tree that counts structural mutations and created text nodes."""

    def __init__(self) -> None:
        super().__init__()
        self.mutations = 0
        self.created_texts = 0

    def reset(self) -> None:
        self.mutations = 0
        self.created_texts = 0

    def insert_before(self, parent, node, reference):
        self.mutations += 1
        super().insert_before(parent, node, reference)

    def replace_child(self, parent, new, old):
        self.mutations += 1
        super().replace_child(parent, new, old)

    def remove_child(self, parent, node):
        self.mutations += 1
        super().remove_child(parent, node)

    def create_text(self, text):
        self.created_texts += 1
        return super().create_text(text)


@pytest.fixture
def host() -> CountingHost:
    return CountingHost()


@pytest.fixture
def engine(host: CountingHost) -> TemplateEngine:
    return TemplateEngine(host=host)
