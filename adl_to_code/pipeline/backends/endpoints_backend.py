"""
TypeScript server endpoint backend.

Generates the `Endpoints` interface a server implements for an API struct,
and a `registerEndpoints` function binding the implemented handlers to a
koa router.
"""

from __future__ import annotations

import logging

from ..analyzer.resolver import DeclResolver
from ..config import CodeGeneratorConfig
from ..schema_ast.nodes import ScopedName
from .api_entries import ApiEntry, load_api
from .base import CodeBackend, Phase
from .code_emitter import CodeEmitter
from .importing_helper import ImportingHelper
from .syntax import TypescriptSyntax

logger = logging.getLogger(__name__)


class EndpointsBackend(CodeBackend):
    """Server endpoint interface generator."""

    TEMPLATE_LANG = "typescript"
    TARGET = "endpoints"
    FILE_EXTENSION = "ts"
    INDENT = "  "

    def __init__(
        self,
        resolver: DeclResolver,
        config: CodeGeneratorConfig,
        api_name: ScopedName,
        generation_comment: str = "",
    ):
        super().__init__(resolver, config, generation_comment)
        self.api_name = api_name
        self.helper = self.create_importing_helper()

    def create_importing_helper(self) -> ImportingHelper:
        return ImportingHelper(TypescriptSyntax())

    def generate(self) -> list[str]:
        api = load_api(self.resolver, self.api_name)

        self.helper.add_type(api.type_expr, ("make",))
        entries = self.run_collect(api.entries)
        self.helper.resolve_imports()

        code = self.new_emitter()
        code.extend(self.render_prefix(imports=self.helper.module_imports(), adl_gen_dir_rel=self.config.adl_gen_dir_rel))
        code.add("")

        with code.block("export interface Endpoints {") as interface_body:
            self.run_phase(Phase.DECL, entries, interface_body)
        code.add("")

        api_maker = self.helper.as_referenced_name(api.type_expr, prefix="make")
        with code.block("export function registerEndpoints(h: Partial<Endpoints>, r: Router) {") as function_body:
            function_body.add(f"const api = {api_maker}({{}});")
            function_body.add("")
            self.run_phase(Phase.IMPL, entries, function_body)
        code.add("")
        return code.write()

    def collect(self, entry: ApiEntry) -> bool:
        if not entry.is_http:
            logger.warning("server-endpoints: unrecognized field %s", entry.name)
            return False
        self.helper.add_type(entry.request_type)
        self.helper.add_type(entry.response_type)
        return True

    def decl(self, entry: ApiEntry, code: CodeEmitter) -> None:
        if entry.comment:
            code.add(f"/** {entry.comment} */")
        request = self.helper.as_referenced_name(entry.request_type)
        response = self.helper.as_referenced_name(entry.response_type)
        code.add(f"{entry.name}(ctx: AContext<{response}>, req: {request}): Promise<void>;")

    def impl(self, entry: ApiEntry, code: CodeEmitter) -> None:
        with code.block(f"if (h.{entry.name}) {{") as body:
            body.add(f"addReqHandler(r, RESOLVER, api.{entry.name}, h.{entry.name}.bind(h));")
