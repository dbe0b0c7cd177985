from typing import Callable, Iterator, List, Optional, Tuple

from typing_extensions import Protocol

StrHeaderListType = List[Tuple[str, str]]
RawHeaderListType = List[Tuple[bytes, bytes]]
AddNoteMethodType = Callable[..., None]


class RawLike(Protocol):
    def __len__(self) -> int: ...

    def __iter__(self) -> Iterator[bytes]: ...

    def one(self) -> Optional[bytes]: ...
