from __future__ import annotations

import logging
import os
import signal
import time
from pathlib import Path
from types import FrameType
from typing import final

from tabulate import tabulate

from withkit_assets.application.gateways.sass_compiler_gateway import SassCompilerGateway
from withkit_assets.application.gateways.script_bundler_gateway import ScriptBundlerGateway
from withkit_assets.application.host.hook_registry import InMemoryHookRegistry
from withkit_assets.application.host.recording_enqueue_sink import RecordingEnqueueSink
from withkit_assets.application.repositories.build_output_repository import (
    BuildOutputRepository,
)
from withkit_assets.application.repositories.theme_filesystem_store import (
    ThemeFilesystemStore,
)
from withkit_assets.application.scheduler.apscheduler_runner import APSchedulerRunner
from withkit_assets.config.logging_setup import configure_logging
from withkit_assets.config.settings_loader import SettingsLoader
from withkit_assets.domain.errors import FatalBuildError
from withkit_assets.domain.models.app_config import AppConfig
from withkit_assets.domain.models.build_mode import BuildMode
from withkit_assets.domain.models.request_context import RequestContext
from withkit_assets.domain.models.results import BuildResult
from withkit_assets.domain.protocols.scheduler_protocol import SchedulerProtocol
from withkit_assets.domain.workflows.compile_bundles import CompileBundles
from withkit_assets.domain.workflows.register_assets import (
    HOOK_BLOCK_ASSETS,
    HOOK_EDITOR_ASSETS,
    HOOK_FRONTEND_ASSETS,
    HOOK_INIT,
    AssetRegistrar,
)
from withkit_assets.domain.workflows.register_editor_extensions import (
    RegisterEditorExtensions,
)
from withkit_assets.domain.workflows.run_build import RunBuild
from withkit_assets.domain.workflows.stamp_version import resolve_theme_version
from withkit_assets.domain.workflows.transform_assets import TransformAssets
from withkit_assets.domain.workflows.watch_sources import WatchSources

PLAN_CONTEXTS = ("frontend", "editor")


@final
class BuildApp:
    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._scheduler: SchedulerProtocol | None = None
        self._should_stop = False
        self._log = logging.getLogger("withkit_assets.build")

    @classmethod
    def from_env(cls, settings_path: Path | None = None) -> BuildApp:
        if settings_path is None:
            settings_file = os.getenv("SETTINGS_FILE")
            settings_path = Path(settings_file) if settings_file else None
        config = SettingsLoader.load(settings_path)
        configure_logging(
            config.user.log_level or "info",
            config.paths.logs_dir / "build_errors.log",
        )
        return cls(config)

    @property
    def config(self) -> AppConfig:
        return self._config

    def _build_use_case(self, mode: BuildMode) -> RunBuild:
        paths = self._config.paths
        output = BuildOutputRepository(paths.build_dir)
        compile_bundles = CompileBundles(
            stylesheet_compiler=SassCompilerGateway(mode, include_paths=paths.source_roots),
            script_bundler=ScriptBundlerGateway(),
            logger=self._log,
        )
        transform_assets = TransformAssets(
            output=output,
            logger=self._log,
            worker_count=self._config.worker_count,
        )
        return RunBuild(
            paths=paths,
            mode=mode,
            compile_bundles=compile_bundles,
            transform_assets=transform_assets,
            output=output,
            lock_path=paths.lock_path,
            lock_timeout_seconds=0.0,
            logger=self._log,
            image_max_width=self._config.image_max_width,
            theme_version=resolve_theme_version(
                self._config.user.theme_version, paths.package_json_path
            ),
        )

    def build(self, mode: BuildMode | None = None) -> int:
        run_build = self._build_use_case(mode or self._config.mode)
        try:
            _ = run_build()
        except FatalBuildError as exc:
            self._log.error("Build failed: %s", exc)
            return 1
        return 0

    def _rebuild(self) -> BuildResult:
        return self._build_use_case(BuildMode.DEVELOPMENT)()

    def start_watch(self) -> None:
        if self.build(BuildMode.DEVELOPMENT) != 0:
            self._log.warning("Initial build failed; watching for changes")

        watch = WatchSources(
            roots=self._config.paths.source_roots,
            run_build=self._rebuild,
            logger=self._log,
        )
        watch.prime()

        scheduler = APSchedulerRunner()
        scheduler.schedule_interval("watch", self._config.watch_interval_seconds, watch)
        scheduler.start()
        self._scheduler = scheduler

        self._log.info(
            "Watching %s every %ss",
            ", ".join(str(root) for root in self._config.paths.source_roots),
            self._config.watch_interval_seconds,
        )
        proxy = self._config.user.browsersync_proxy
        if proxy:
            self._log.info("Live reload proxy: %s", proxy)

    def watch(self) -> int:
        self._install_signal_handlers()
        self.start_watch()
        try:
            while not self._should_stop:
                time.sleep(0.5)
        finally:
            self.shutdown()
        return 0

    def shutdown(self) -> None:
        scheduler = self._scheduler
        if scheduler is None:
            return
        self._scheduler = None
        scheduler.shutdown()
        self._log.info("Watch stopped")

    def _install_signal_handlers(self) -> None:
        def _stop_handler(_signum: int, _frame: FrameType | None) -> None:
            self._should_stop = True

        _ = signal.signal(signal.SIGTERM, _stop_handler)
        _ = signal.signal(signal.SIGINT, _stop_handler)

    def plan_calls(self, context: str) -> RecordingEnqueueSink:
        """Fire the registration hooks of one request against a recording sink."""
        if context not in PLAN_CONTEXTS:
            raise ValueError(f"Unknown plan context: {context}")

        store = ThemeFilesystemStore(
            override_dir=self._config.override_root,
            base_dir=self._config.base_root,
            override_uri=self._config.override_uri,
            base_uri=self._config.base_uri,
        )
        sink = RecordingEnqueueSink()
        hooks = InMemoryHookRegistry()
        prefix = self._config.theme_prefix
        AssetRegistrar(store, sink, prefix, self._log).install(
            hooks, parent_prefix=self._config.parent_theme_prefix
        )
        RegisterEditorExtensions(sink, prefix, self._log).install(hooks)

        if context == "editor":
            request = RequestContext.block_editor()
            hook_order = (HOOK_INIT, HOOK_BLOCK_ASSETS, HOOK_EDITOR_ASSETS)
        else:
            request = RequestContext.frontend()
            hook_order = (HOOK_INIT, HOOK_BLOCK_ASSETS, HOOK_FRONTEND_ASSETS)
        for hook in hook_order:
            hooks.do_action(hook, request)
        return sink

    def plan(self, context: str) -> int:
        sink = self.plan_calls(context)
        rows = [
            [call.method, call.handle, ", ".join(f"{k}={v}" for k, v in call.arguments)]
            for call in sink.calls
        ]
        print(tabulate(rows, headers=["call", "handle", "arguments"], tablefmt="simple"))
        return 0
