from withkit_assets.domain.protocols.enqueue_sink_protocol import EnqueueSinkProtocol
from withkit_assets.domain.protocols.hook_registry_protocol import (
    HookCallback,
    HookRegistryProtocol,
)
from withkit_assets.domain.protocols.overridable_store_protocol import OverridableStoreProtocol
from withkit_assets.domain.protocols.scheduler_protocol import SchedulerProtocol
from withkit_assets.domain.protocols.script_bundler_protocol import (
    ScriptBundle,
    ScriptBundlerProtocol,
)
from withkit_assets.domain.protocols.stylesheet_compiler_protocol import (
    StylesheetCompilerProtocol,
)
from withkit_assets.domain.protocols.transform_protocol import TransformProtocol

__all__ = [
    "EnqueueSinkProtocol",
    "HookCallback",
    "HookRegistryProtocol",
    "OverridableStoreProtocol",
    "SchedulerProtocol",
    "ScriptBundle",
    "ScriptBundlerProtocol",
    "StylesheetCompilerProtocol",
    "TransformProtocol",
]
