"""
TypeScript service client backend.

Generates a class extending HttpServiceBase with one typed async method per
HTTP entry of an API struct:

    /** Login a user */
    async login(req: LoginReq): Promise<LoginResp> {
      return this.postLogin.call(req);
    }
"""

from __future__ import annotations

import logging

from ...utils import camel_case
from ..analyzer.resolver import DeclResolver
from ..config import CodeGeneratorConfig
from ..schema_ast.nodes import ScopedName
from .api_entries import Api, ApiEntry, load_api
from .base import CodeBackend, Phase
from .code_emitter import CodeEmitter
from .importing_helper import ImportingHelper
from .syntax import TypescriptSyntax

logger = logging.getLogger(__name__)


class ServiceBackend(CodeBackend):
    """Typed service client generator."""

    TEMPLATE_LANG = "typescript"
    TARGET = "service"
    FILE_EXTENSION = "ts"
    INDENT = "  "

    # Companion symbols of the API struct: its scoped name and its value maker
    API_PREFIXES = ("sn", "make")

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

        self.helper.add_type(api.type_expr, self.API_PREFIXES)
        entries = self.run_collect(api.entries)
        self.helper.resolve_imports()

        code = self.new_emitter()
        code.extend(self.render_prefix(imports=self.helper.module_imports(), adl_gen_dir_rel=self.config.adl_gen_dir_rel))
        code.add("")
        self._emit_class(api, entries, code)
        code.add("")
        return code.write()

    def _emit_class(self, api: Api, entries: list[ApiEntry], code: CodeEmitter) -> None:
        api_sn = self.helper.as_referenced_name(api.type_expr, prefix="sn")
        api_maker = self.helper.as_referenced_name(api.type_expr, prefix="make")

        if api.comment:
            code.add(f"/** {api.comment} */")
        with code.block(f"export class {self.config.service_class} extends HttpServiceBase {{") as class_body:
            self.run_phase(Phase.DECL, entries, class_body)

            class_body.add("constructor(")
            class_body.inner().extend(
                [
                    "/** Fetcher over HTTP */",
                    "http: HttpFetch,",
                    "/** Base URL of the API endpoints */",
                    "baseUrl: string,",
                    "/** Resolver for ADL types */",
                    "resolver: DeclResolver,",
                    "/** fn to get an auth token */",
                    "getAuthToken: () => AuthTokens,",
                    "/** Error handler to allow for cross cutting concerns, e.g. authorization errors */",
                    "handleError: (error: HttpServiceError) => void",
                ]
            )
            with class_body.block(") {") as ctor_body:
                ctor_body.add("super(http, baseUrl, resolver, getAuthToken, handleError);")
                ctor_body.add(f"const api = this.annotatedApi({api_sn}, {api_maker}({{}}));")
                self.run_phase(Phase.CTOR, entries, ctor_body)

            self.run_phase(Phase.IMPL, entries, class_body)

    def collect(self, entry: ApiEntry) -> bool:
        if not entry.is_http:
            logger.warning("typescript-services: unrecognized field %s", entry.name)
            return False
        self.helper.add_type(entry.request_type)
        self.helper.add_type(entry.response_type)
        return True

    def decl(self, entry: ApiEntry, code: CodeEmitter) -> None:
        if entry.comment:
            code.add(f"/** {entry.comment} */")
        code.add(f"private {self._slot_name(entry)}: {self._fn_type(entry)};")
        code.add("")

    def ctor(self, entry: ApiEntry, code: CodeEmitter) -> None:
        maker = "mkGetFn" if entry.method == "get" else "mkPostFn"
        code.add(f"this.{self._slot_name(entry)} = this.{maker}(api.{entry.name});")

    def impl(self, entry: ApiEntry, code: CodeEmitter) -> None:
        code.add("")
        if entry.comment:
            code.add(f"/** {entry.comment} */")
        response = self.helper.as_referenced_name(entry.response_type)
        slot = self._slot_name(entry)
        if entry.method == "get":
            signature, call = f"async {entry.name}(): Promise<{response}> {{", f"return this.{slot}.call();"
        else:
            request = self.helper.as_referenced_name(entry.request_type)
            signature, call = f"async {entry.name}(req: {request}): Promise<{response}> {{", f"return this.{slot}.call(req);"
        with code.block(signature) as body:
            body.add(call)

    def _slot_name(self, entry: ApiEntry) -> str:
        return camel_case(f"{entry.method} {entry.name}")

    def _fn_type(self, entry: ApiEntry) -> str:
        response = self.helper.as_referenced_name(entry.response_type)
        if entry.method == "get":
            return f"GetFn<{response}>"
        request = self.helper.as_referenced_name(entry.request_type)
        return f"PostFn<{request}, {response}>"
