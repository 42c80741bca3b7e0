from .exceptions import (
    InMemoryResourceError,
    ResourceAlreadyExistsError,
    ResourceDoesNotExistError,
    ResourceError,
    ResourceProviderError,
    UnregisteredResourceError,
)
from .file_resource import FileResource, FileResourceResolver, FileResourceVersion
from .memory import InMemoryResources, MutableResource
from .provider import DefaultResourceProvider, ResourceProvider, ResourceResolver
from .resource import (
    EncodingAwareResource,
    IncrementallySavableResource,
    ObservableResource,
    Resource,
    SavableResource,
    VersionedResource,
    save,
    should_prefer_full_save,
    should_save_content,
    try_save_content_changes,
)
from .text_edits import (
    Position,
    Range,
    TextDocumentContentChangeEvent,
    apply_content_changes,
)
from .types import (
    ResourceReadOptions,
    ResourceSaveOptions,
    ResourceVersion,
    SaveContext,
)

__all__ = [
    "DefaultResourceProvider",
    "EncodingAwareResource",
    "FileResource",
    "FileResourceResolver",
    "FileResourceVersion",
    "InMemoryResourceError",
    "InMemoryResources",
    "IncrementallySavableResource",
    "MutableResource",
    "ObservableResource",
    "Position",
    "Range",
    "Resource",
    "ResourceAlreadyExistsError",
    "ResourceDoesNotExistError",
    "ResourceError",
    "ResourceProvider",
    "ResourceProviderError",
    "ResourceReadOptions",
    "ResourceResolver",
    "ResourceSaveOptions",
    "ResourceVersion",
    "SaveContext",
    "SavableResource",
    "TextDocumentContentChangeEvent",
    "UnregisteredResourceError",
    "VersionedResource",
    "apply_content_changes",
    "save",
    "should_prefer_full_save",
    "should_save_content",
    "try_save_content_changes",
]
