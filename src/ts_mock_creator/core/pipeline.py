"""Mock generation pipeline.

resolve declaration -> rewrite to literal -> aggregate imports -> assemble
-> pretty-print -> write. Every fatal error is raised before the write step.
"""

import logging
from pathlib import Path
from typing import Callable, Sequence

from ts_mock_creator.config.plugin import Plugin, load_plugin
from ts_mock_creator.config.project import MockConfig
from ts_mock_creator.core.assembler import MockFile
from ts_mock_creator.core.errors import GenerationResult, LookupFailure, NotFoundError, UserCancelled
from ts_mock_creator.core.imports import aggregate_imports, render_imports
from ts_mock_creator.core.interfaces import DeclarationResolver, ResolverFactory, RewriteEngine
from ts_mock_creator.core.paths import mock_file_path
from ts_mock_creator.core.writer import write_mock

logger = logging.getLogger(__name__)


class MockPipeline:
    """Generates mock files for type declarations of a project"""

    def __init__(self, config: MockConfig, plugin: Plugin,
                 resolver_factory: ResolverFactory, rewriter: RewriteEngine):
        self.config = config
        self.plugin = plugin
        self.resolver_factory = resolver_factory
        self.rewriter = rewriter

    @classmethod
    def for_project(cls, base_dir: Path | None = None, config: MockConfig | None = None) -> "MockPipeline":
        """Pipeline using the project's config, its plugin and the bundled TypeScript resolver"""
        from ts_mock_creator.typescript import TypeScriptResolver, rewrite

        config = config or MockConfig(base_dir)
        plugin = load_plugin(config.plugin_file)
        return cls(config, plugin, TypeScriptResolver, rewrite)

    def _resolver(self, source_file: str | Path) -> DeclarationResolver:
        return self.resolver_factory(
            str(source_file),
            break_on_unresolved_imports=True,
            do_not_resolve=self.plugin.do_not_resolve,
        )

    def list_declarations(self, source_file: str | Path) -> list[str]:
        """Identifiers of the type declarations in ``source_file``"""
        declarations = self._resolver(source_file).list_declarations()
        if not declarations:
            raise NotFoundError(f"No type declarations available in {source_file}.")
        return [d.identifier for d in declarations]

    def generate_interactive(self, source_file: str | Path,
                             choose: Callable[[Sequence[str]], str | None]) -> GenerationResult:
        """Let ``choose`` pick one of the file's declarations, then generate its mock.

        Raises:
            UserCancelled: If ``choose`` returns nothing
        """
        identifiers = self.list_declarations(source_file)
        identifier = choose(identifiers)
        if not identifier:
            raise UserCancelled("No type selected")
        return self.generate(source_file, identifier)

    def generate(self, source_file: str | Path, identifier: str) -> GenerationResult:
        """Generate and write the mock for ``identifier`` declared in ``source_file``"""
        resolver = self._resolver(source_file)
        declaration = resolver.resolve(identifier)
        logger.debug("Resolved %s from %s", identifier, source_file)

        expression = self.rewriter(declaration.type, self.plugin.transformers)
        output_path = mock_file_path(source_file, self.config.mock_location)

        diagnostics: list[LookupFailure] = []
        primary_source = resolver.get_source_path_of(declaration) or str(source_file)
        requirements = aggregate_imports(
            declaration,
            primary_source,
            resolver.scan_enum_references(declaration.type),
            resolver,
            diagnostics,
        )
        imports = render_imports(requirements, output_path)

        mock = MockFile(
            identifier=declaration.identifier,
            expression=expression,
            imports=imports,
            header=self.plugin.render_header(),
        )
        content = mock.render(self.config.indent)

        write_mock(output_path, content)
        return GenerationResult(
            identifier=declaration.identifier,
            output_path=str(output_path),
            imports=imports,
            diagnostics=diagnostics,
        )
