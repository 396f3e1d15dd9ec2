"""Import aggregation for generated mock files."""

import logging
from pathlib import Path
from typing import Iterable

from ts_mock_creator.core.errors import LookupFailure, ResolveError
from ts_mock_creator.core.interfaces import DeclarationResolver
from ts_mock_creator.core.models import Declaration, ImportRequirement
from ts_mock_creator.core.paths import relative_import_path

logger = logging.getLogger(__name__)


def aggregate_imports(
    primary: Declaration,
    primary_source: str,
    enum_refs: Iterable[dict],
    resolver: DeclarationResolver,
    diagnostics: list[LookupFailure] | None = None,
) -> list[ImportRequirement]:
    """Collect the declarations a mock file has to import.

    The mocked declaration always comes first, followed by the enums found in its
    structure in scan order. Entries sharing (source path, identifier) collapse into
    the first one. Enum references the resolver cannot place are skipped and
    recorded in ``diagnostics``.
    """
    requirements = [ImportRequirement.from_declaration(primary, primary_source)]
    seen = {requirements[0].key}

    for ref in enum_refs:
        name = ref.get("name", "")
        try:
            declaration = resolver.resolve(name)
        except ResolveError as e:
            _skip(name, str(e), diagnostics)
            continue

        source_path = resolver.get_source_path_of(declaration)
        if source_path is None:
            _skip(name, "source file unknown", diagnostics)
            continue

        requirement = ImportRequirement.from_declaration(declaration, source_path)
        if requirement.key in seen:
            continue
        seen.add(requirement.key)
        requirements.append(requirement)

    return requirements


def _skip(name: str, reason: str, diagnostics: list[LookupFailure] | None) -> None:
    logger.warning("Skipping import for enum '%s': %s", name, reason)
    if diagnostics is not None:
        diagnostics.append(LookupFailure(reference=name, reason=reason))


def render_import(requirement: ImportRequirement, generated_file: str | Path) -> str:
    """Render one import clause relative to the generated file.

    Default exports: ``import Foo from "../types/foo"``
    Named exports:   ``import { Foo } from "../types/foo"``
    """
    path = relative_import_path(generated_file, requirement.source_path)
    if requirement.default:
        return f'import {requirement.identifier} from "{path}"'
    return f'import {{ {requirement.identifier} }} from "{path}"'


def render_imports(requirements: Iterable[ImportRequirement], generated_file: str | Path) -> list[str]:
    """render_import() for each requirement, keeping their order"""
    return [render_import(r, generated_file) for r in requirements]
