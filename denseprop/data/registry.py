"""Dataset registry for the bundled training tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, MutableMapping, Tuple

from ..core.types import Sample


@dataclass(frozen=True)
class Dataset:
    """A named, in-memory list of samples.

    Attributes
    ----------
    name:
        Registry identifier.
    samples:
        Input/target pairs in their canonical order.
    metadata:
        Free-form description (pattern geometry, labels) used by reporting
        and the CLI.
    """

    name: str
    samples: Tuple[Sample, ...]
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def input_width(self) -> int:
        return len(self.samples[0].inputs)

    @property
    def output_width(self) -> int:
        return len(self.samples[0].targets)

    def __len__(self) -> int:
        return len(self.samples)


DatasetFactory = Callable[..., Dataset]


_REGISTRY: MutableMapping[str, DatasetFactory] = {}


def register_dataset(
    name: str | None = None,
    factory: DatasetFactory | None = None,
) -> Callable[[DatasetFactory], DatasetFactory] | DatasetFactory:
    """Register a dataset factory, directly or as a decorator."""

    def _decorator(func: DatasetFactory) -> DatasetFactory:
        _REGISTRY[str(name or func.__name__)] = func
        return func

    if factory is not None:
        return _decorator(factory)
    if name is None:
        raise TypeError("register_dataset requires a name when used without a decorator")
    return _decorator


def get_dataset(dataset: str, /, **options: Any) -> Dataset:
    """Return the :class:`Dataset` registered as ``dataset``."""

    if dataset not in _REGISTRY:
        available = ", ".join(sorted(_REGISTRY))
        raise KeyError(f"Unknown dataset {dataset!r}. Available datasets: {available}")
    spec = _REGISTRY[dataset](**options)
    _validate(spec)
    return spec


def available_datasets() -> Iterable[str]:
    """Return the sorted list of available dataset identifiers."""

    return sorted(_REGISTRY)


def _validate(spec: Dataset) -> None:
    if not spec.samples:
        raise ValueError(f"Dataset {spec.name!r} has no samples")
    widths = {(len(s.inputs), len(s.targets)) for s in spec.samples}
    if len(widths) != 1:
        raise ValueError(f"Dataset {spec.name!r} mixes sample shapes: {sorted(widths)}")


get = get_dataset

__all__ = ["Dataset", "available_datasets", "get", "get_dataset", "register_dataset"]
