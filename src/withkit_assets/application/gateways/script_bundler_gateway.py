from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, final
from typing_extensions import override

from withkit_assets.domain.errors import FatalBuildError
from withkit_assets.domain.protocols.script_bundler_protocol import (
    ScriptBundle,
    ScriptBundlerProtocol,
)

_MODULE_RUNTIME = """\
var __modules = {
%s
};
var __cache = {};
function __export(target, getters) {
  for (var name in getters) {
    Object.defineProperty(target, name, { enumerable: true, get: getters[name] });
  }
}
function __require(id) {
  if (__cache[id]) {
    return __cache[id];
  }
  var exports = (__cache[id] = {});
  __modules[id](exports, __require);
  return exports;
}
__require(%s);"""


def _camel_case(package: str) -> str:
    head, *rest = package.split("-")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _wrap(body: str) -> str:
    return f"(function () {{\n{body.rstrip()}\n}})();\n"


@dataclass(frozen=True, slots=True)
class _LinkedModule:
    module_id: str
    code: str
    has_exports: bool


@final
class ScriptBundlerGateway(ScriptBundlerProtocol):
    """Bundle a script entry into one classic script.

    ``import { select } from '@wordpress/data'`` becomes
    ``const { select } = wp.data;`` and adds ``wp-data`` to the dependency
    list of the bundle's manifest. Relative imports are inlined: every local
    module becomes a function in a module table, its ``export`` statements
    rewritten onto an exports object. Imports that are neither host-provided
    nor relative cannot be satisfied and fail the build.
    """

    # Packages the host does not ship as globals; they must be bundled.
    _BUNDLED_PACKAGES: ClassVar[frozenset[str]] = frozenset(
        {"dataviews", "icons", "interface", "sync", "undo-manager", "upload-media"}
    )
    _VENDOR_GLOBALS: ClassVar[dict[str, tuple[str, str]]] = {
        "react": ("window.React", "react"),
        "react-dom": ("window.ReactDOM", "react-dom"),
        "jquery": ("window.jQuery", "jquery"),
        "lodash": ("window.lodash", "lodash"),
    }
    _IMPORT: ClassVar[re.Pattern[str]] = re.compile(
        r"""^[ \t]*import[ \t]+(?P<clause>[^'";]+?)[ \t]+from[ \t]+"""
        r"""(?P<quote>['"])(?P<module>[^'"]+)(?P=quote)[ \t]*;?[ \t]*$""",
        re.MULTILINE,
    )
    _SIDE_EFFECT_IMPORT: ClassVar[re.Pattern[str]] = re.compile(
        r"""^[ \t]*import[ \t]+(?P<quote>['"])(?P<module>[^'"]+)(?P=quote)[ \t]*;?[ \t]*$""",
        re.MULTILINE,
    )
    _EXPORT_DEFAULT_DECLARATION: ClassVar[re.Pattern[str]] = re.compile(
        r"^(?P<indent>[ \t]*)export[ \t]+default[ \t]+"
        r"(?P<kind>(?:async[ \t]+)?function\*?|class)[ \t]+(?P<name>[A-Za-z_$][\w$]*)",
        re.MULTILINE,
    )
    _EXPORT_DEFAULT: ClassVar[re.Pattern[str]] = re.compile(
        r"^(?P<indent>[ \t]*)export[ \t]+default[ \t]+", re.MULTILINE
    )
    _EXPORT_DECLARATION: ClassVar[re.Pattern[str]] = re.compile(
        r"^(?P<indent>[ \t]*)export[ \t]+"
        r"(?P<kind>(?:async[ \t]+)?function\*?|class|const|let|var)[ \t]+"
        r"(?P<name>[A-Za-z_$][\w$]*)",
        re.MULTILINE,
    )
    _EXPORT_LIST: ClassVar[re.Pattern[str]] = re.compile(
        r"^[ \t]*export[ \t]*\{(?P<names>[^}]*)\}[ \t]*;?[ \t]*$\n?", re.MULTILINE
    )
    _MODULE_SYNTAX: ClassVar[re.Pattern[str]] = re.compile(
        r"""^[ \t]*(?:import[ \t]+[\w${*'"]|import[ \t]*[{*'"]|export(?:[ \t]+|[ \t]*[{*]))""",
        re.MULTILINE,
    )
    _CANDIDATE_SUFFIXES: ClassVar[tuple[str, ...]] = ("", ".js", "/index.js")

    @classmethod
    def external_for(cls, module: str) -> tuple[str, str] | None:
        """``(global expression, dependency handle)`` for a host-provided module."""
        if module.startswith("@wordpress/"):
            package = module.removeprefix("@wordpress/")
            if not package or "/" in package or package in cls._BUNDLED_PACKAGES:
                return None
            return f"wp.{_camel_case(package)}", f"wp-{package}"
        return cls._VENDOR_GLOBALS.get(module)

    @staticmethod
    def _binding(clause: str, expression: str) -> str:
        clause = clause.strip()
        if clause.startswith("* as "):
            return f"const {clause[5:].strip()} = {expression};"
        if clause.startswith("{"):
            names = [
                name.strip().replace(" as ", ": ")
                for name in clause.strip("{} \t\n").split(",")
                if name.strip()
            ]
            return f"const {{ {', '.join(names)} }} = {expression};"
        if "," in clause:
            default, named = clause.split(",", 1)
            return "\n".join(
                [
                    f"const {default.strip()} = {expression};",
                    ScriptBundlerGateway._binding(named, expression),
                ]
            )
        return f"const {clause} = {expression};"

    @staticmethod
    def _local_binding(clause: str, expression: str) -> str:
        # A local module's default export lives on ``.default``.
        clause = clause.strip()
        if clause.startswith(("* as ", "{")):
            return ScriptBundlerGateway._binding(clause, expression)
        if "," in clause:
            default, named = clause.split(",", 1)
            return "\n".join(
                [
                    f"const {default.strip()} = {expression}.default;",
                    ScriptBundlerGateway._binding(named, expression),
                ]
            )
        return f"const {clause} = {expression}.default;"

    def transform(self, code: str) -> ScriptBundle:
        """Rewrite host-provided imports only; other lines are left unchanged."""
        dependencies: set[str] = set()

        def _rewrite(match: re.Match[str]) -> str:
            external = self.external_for(match.group("module"))
            if external is None:
                return match.group(0)
            expression, handle = external
            dependencies.add(handle)
            return self._binding(match.group("clause"), expression)

        def _drop_side_effect(match: re.Match[str]) -> str:
            external = self.external_for(match.group("module"))
            if external is None:
                return match.group(0)
            dependencies.add(external[1])
            return ""

        rewritten = self._IMPORT.sub(_rewrite, code)
        rewritten = self._SIDE_EFFECT_IMPORT.sub(_drop_side_effect, rewritten)
        return ScriptBundle(code=rewritten, dependencies=tuple(sorted(dependencies)))

    @classmethod
    def _resolve_local(cls, importer: Path, specifier: str) -> Path:
        base = os.path.normpath(importer.parent / specifier)
        for suffix in cls._CANDIDATE_SUFFIXES:
            candidate = Path(base + suffix)
            if candidate.is_file():
                return candidate
        raise FatalBuildError(f"Cannot resolve '{specifier}' imported from {importer}")

    @classmethod
    def _rewrite_exports(cls, code: str) -> tuple[str, dict[str, str], bool]:
        """Strip ``export`` keywords; returns code, exported -> local names, default assigned."""
        exported: dict[str, str] = {}

        def _default_declaration(match: re.Match[str]) -> str:
            exported["default"] = match.group("name")
            return f"{match.group('indent')}{match.group('kind')} {match.group('name')}"

        def _declaration(match: re.Match[str]) -> str:
            exported[match.group("name")] = match.group("name")
            return f"{match.group('indent')}{match.group('kind')} {match.group('name')}"

        def _list(match: re.Match[str]) -> str:
            for item in match.group("names").split(","):
                local, _, alias = item.strip().partition(" as ")
                if local.strip():
                    exported[(alias or local).strip()] = local.strip()
            return ""

        code = cls._EXPORT_DEFAULT_DECLARATION.sub(_default_declaration, code)
        code, assigned = cls._EXPORT_DEFAULT.subn(r"\g<indent>exports.default = ", code)
        code = cls._EXPORT_DECLARATION.sub(_declaration, code)
        code = cls._EXPORT_LIST.sub(_list, code)
        return code, exported, assigned > 0

    def _link(
        self,
        path: Path,
        root: Path,
        linked: dict[Path, _LinkedModule],
        dependencies: set[str],
    ) -> None:
        if path in linked:
            return
        external = self.transform(path.read_text("utf-8"))
        dependencies.update(external.dependencies)
        targets: list[Path] = []

        def _require(specifier: str) -> str:
            if not specifier.startswith("."):
                raise FatalBuildError(
                    f"Cannot bundle '{specifier}' imported from {path}: "
                    "only host-provided packages and relative modules are supported"
                )
            target = self._resolve_local(path, specifier)
            targets.append(target)
            return f'__require("{Path(os.path.relpath(target, root)).as_posix()}")'

        code = self._IMPORT.sub(
            lambda match: self._local_binding(
                match.group("clause"), _require(match.group("module"))
            ),
            external.code,
        )
        code = self._SIDE_EFFECT_IMPORT.sub(
            lambda match: f"{_require(match.group('module'))};", code
        )
        code, exported, assigned = self._rewrite_exports(code)
        leftover = self._MODULE_SYNTAX.search(code)
        if leftover is not None:
            line = code[leftover.start() :].splitlines()[0].strip()
            raise FatalBuildError(f"Unsupported module syntax in {path}: {line}")
        if exported:
            getters = ", ".join(f"{name}: () => {local}" for name, local in exported.items())
            code = f"__export(exports, {{ {getters} }});\n{code}"

        module_id = Path(os.path.relpath(path, root)).as_posix()
        linked[path] = _LinkedModule(module_id, code, bool(exported) or assigned)
        for target in targets:
            self._link(target, root, linked, dependencies)

    @override
    def bundle(self, source: Path) -> ScriptBundle:
        if not source.is_file():
            raise FileNotFoundError(f"Script source not found: {source}")
        entry_path = Path(os.path.abspath(source))
        linked: dict[Path, _LinkedModule] = {}
        dependencies: set[str] = set()
        self._link(entry_path, entry_path.parent, linked, dependencies)

        entry = linked[entry_path]
        if len(linked) == 1 and not entry.has_exports:
            return ScriptBundle(code=_wrap(entry.code), dependencies=tuple(sorted(dependencies)))
        table = ",\n".join(
            f'"{module.module_id}": function (exports, __require) {{\n{module.code.rstrip()}\n}}'
            for module in linked.values()
        )
        code = _wrap(_MODULE_RUNTIME % (table, f'"{entry.module_id}"'))
        return ScriptBundle(code=code, dependencies=tuple(sorted(dependencies)))
