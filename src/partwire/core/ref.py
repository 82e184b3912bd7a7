from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Ref(Generic[T]):
    """Holder that receives the element bound to an element part.

    Usage:
        button = Ref()
        template.instantiate(values_processor, [button])
        button.current  # the <button> element
    """

    def __init__(self, current: Optional[T] = None):
        self.current = current

    def __repr__(self) -> str:
        return f"Ref({self.current!r})"
