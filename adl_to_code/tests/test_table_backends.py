"""
Tests for the kysely and sea-query table backends.
"""

import pytest

from adl_to_code.pipeline.analyzer import DeclResolver
from adl_to_code.pipeline.backends import KyselyBackend, SeaQueryBackend
from adl_to_code.pipeline.config import CodeGeneratorConfig
from adl_to_code.pipeline.errors import InvalidAnnotationError
from adl_to_code.tests.builders import (
    BOOL,
    DOUBLE,
    INT64,
    JSON,
    STRING,
    ann,
    column_name,
    enum,
    fld,
    module,
    modules,
    newtype,
    nullable,
    primary_key,
    ref,
    std_modules,
    string_map,
    struct,
    table,
    typedef,
    vector,
)


@pytest.fixture
def config():
    config = CodeGeneratorConfig()
    config.add_generation_comment = False
    return config


def generate(backend_class, resolver, config):
    return "\n".join(backend_class(resolver, config).generate())


class TestKysely:
    @pytest.fixture
    def resolver(self):
        return DeclResolver(
            modules(
                *std_modules(),
                module(
                    "protoapp.db",
                    enum("Role", "admin", "user"),
                    struct(
                        "AppUser",
                        [
                            fld("fullname", STRING),
                            fld("email", STRING),
                            fld("isAdmin", BOOL),
                            fld("nickname", ref("sys.types.Maybe", STRING)),
                            fld("role", ref("protoapp.db.Role")),
                            fld("createdAt", ref("common.Instant")),
                        ],
                        table(with_id_primary_key=True),
                    ),
                    struct(
                        "Message",
                        [
                            fld("postedAt", ref("common.Instant")),
                            fld("userId", ref("common.db.DbKey", ref("protoapp.db.AppUser"))),
                            fld("message", STRING),
                            fld("replyTo", nullable(ref("common.db.DbKey", ref("protoapp.db.Message")))),
                            fld("tags", vector(STRING)),
                            fld("meta", JSON),
                            fld("counts", string_map(INT64)),
                        ],
                        table(with_id_primary_key=True),
                    ),
                    struct("MetaAdlDecl", [fld("decl", JSON)], table("meta_adl_decl")),
                ),
            )
        )

    def test_snapshot(self, resolver, config):
        expected = """\
import * as db from "./protoapp/db";

interface AppUserTable {
  id: string;
  fullname: string;
  email: string;
  is_admin: boolean;
  nickname: string | null;
  role: db.Role;
  created_at: Date;
}
interface MessageTable {
  id: string;
  posted_at: Date;
  user_id: string;
  message: string;
  reply_to: string | null;
  tags: string[];
  meta: {};
  counts: Record<string, bigint>;
}
export interface Database {
  app_user: AppUserTable;
  message: MessageTable;
}
"""
        assert generate(KyselyBackend, resolver, config) == expected

    def test_import_root_and_overrides(self, resolver, config):
        config.kysely_import_root = "../adl-gen"
        config.typescript_type_overrides = {}
        config.excluded_tables = []
        output = generate(KyselyBackend, resolver, config)

        assert 'import * as db from "../adl-gen/protoapp/db";' in output
        assert "created_at: bigint;" in output
        assert "meta_adl_decl: MetaAdlDeclTable;" in output

    def test_explicit_id_column(self, config):
        resolver = DeclResolver(
            modules(
                module(
                    "app",
                    struct("User", [fld("id", STRING, primary_key()), fld("email", STRING)], table(with_id_primary_key=True)),
                )
            )
        )
        expected = """\
interface UserTable {
  id: string;
  email: string;
}
export interface Database {
  user: UserTable;
}
"""
        assert generate(KyselyBackend, resolver, config) == expected

    def test_column_name_and_table_name(self, config):
        resolver = DeclResolver(
            modules(module("app", struct("Person", [fld("emailAddress", STRING, column_name("email"))], table("people"))))
        )
        output = generate(KyselyBackend, resolver, config)

        assert "interface PeopleTable {\n  email: string;\n}" in output
        assert "  people: PeopleTable;" in output

    def test_override_reached_through_aliases(self, config):
        resolver = DeclResolver(
            modules(
                *std_modules(),
                module(
                    "app",
                    typedef("CreatedAt", ref("common.Instant")),
                    newtype("Stamp", ref("app.CreatedAt")),
                    struct("Event", [fld("at", ref("app.CreatedAt")), fld("stamp", ref("app.Stamp"))], table()),
                ),
            )
        )
        expected = """\
interface EventTable {
  at: Date;
  stamp: Date;
}
export interface Database {
  event: EventTable;
}
"""
        assert generate(KyselyBackend, resolver, config) == expected

    def test_generation_comment(self, resolver):
        lines = KyselyBackend(resolver, CodeGeneratorConfig(), "// Generated by adl_to_code").generate()
        assert lines[:2] == ["// Generated by adl_to_code", 'import * as db from "./protoapp/db";']

    def test_table_must_be_struct(self, config):
        resolver = DeclResolver(modules(module("app", enum("Color", "red", "green"))))
        resolver.modules["app"].decls["Color"].annotations.append(ann("common.db.DbTable"))
        with pytest.raises(InvalidAnnotationError):
            KyselyBackend(resolver, config).generate()


class TestSeaQuery:
    @pytest.fixture
    def resolver(self):
        return DeclResolver(
            modules(
                *std_modules(),
                module(
                    "protoapp.db",
                    enum("Role", "admin", "user"),
                    struct(
                        "AppUser",
                        [
                            fld("id", ref("common.db.DbKey", ref("protoapp.db.AppUser")), primary_key()),
                            fld("fullname", STRING),
                            fld("isAdmin", BOOL),
                            fld("role", ref("protoapp.db.Role")),
                            fld("createdAt", ref("common.Instant")),
                        ],
                        table(),
                    ),
                    struct(
                        "Message",
                        [
                            fld("id", ref("common.db.DbKey", ref("protoapp.db.Message")), primary_key()),
                            fld("userId", ref("common.db.DbKey", ref("protoapp.db.AppUser"))),
                            fld("replyTo", nullable(ref("common.db.DbKey", ref("protoapp.db.Message")))),
                            fld("tags", vector(STRING)),
                            fld("score", ref("sys.types.Maybe", DOUBLE)),
                        ],
                        table(),
                    ),
                ),
            )
        )

    def test_snapshot(self, resolver, config):
        expected = """\
// This file is generated from the schema definition

use super::types::ColumnSpec;
use sea_query::{Alias, DynIden, IntoIden};

use crate::adl::gen as adlgen;
use crate::adl::rt as adlrt;
use crate::adl::custom::DbKey;

use adlgen::protoapp::db;
use adlgen::common;

pub struct AppUser {}

impl AppUser {
    pub fn table_str() -> &'static str {
        "app_user"
    }

    pub fn table() -> DynIden {
        Alias::new(Self::table_str()).into_iden()
    }

    pub fn id() -> ColumnSpec<DbKey<db::AppUser>> {
        ColumnSpec::new(Self::table_str(), "id")
    }

    pub fn fullname() -> ColumnSpec<String> {
        ColumnSpec::new(Self::table_str(), "fullname")
    }

    pub fn is_admin() -> ColumnSpec<bool> {
        ColumnSpec::new(Self::table_str(), "is_admin")
    }

    pub fn role() -> ColumnSpec<db::Role> {
        ColumnSpec::new(Self::table_str(), "role")
    }

    pub fn created_at() -> ColumnSpec<common::Instant> {
        ColumnSpec::new(Self::table_str(), "created_at")
    }
}

pub struct Message {}

impl Message {
    pub fn table_str() -> &'static str {
        "message"
    }

    pub fn table() -> DynIden {
        Alias::new(Self::table_str()).into_iden()
    }

    pub fn id() -> ColumnSpec<DbKey<db::Message>> {
        ColumnSpec::new(Self::table_str(), "id")
    }

    pub fn user_id() -> ColumnSpec<adlrt::custom::common::db::DbKey<db::AppUser>> {
        ColumnSpec::new(Self::table_str(), "user_id")
    }

    pub fn reply_to() -> ColumnSpec<std::option::Option<adlrt::custom::common::db::DbKey<db::Message>>> {
        ColumnSpec::new(Self::table_str(), "reply_to")
    }

    pub fn tags() -> ColumnSpec<std::vec::Vec<String>> {
        ColumnSpec::new(Self::table_str(), "tags")
    }

    pub fn score() -> ColumnSpec<std::option::Option<f64>> {
        ColumnSpec::new(Self::table_str(), "score")
    }
}
"""
        assert generate(SeaQueryBackend, resolver, config) == expected

    def test_foreign_key_is_key_wrapped(self, resolver, config):
        output = generate(SeaQueryBackend, resolver, config)
        assert "ColumnSpec<adlrt::custom::common::db::DbKey<db::AppUser>>" in output
        assert "ColumnSpec<db::AppUser>" not in output

    def test_module_aliases_from_config(self, resolver, config):
        config.rust_gen_module_alias = "gen"
        config.rust_runtime_module_alias = "rt"
        output = generate(SeaQueryBackend, resolver, config)

        assert "use crate::adl::gen as gen;" in output
        assert "use gen::protoapp::db;" in output
        assert "rt::custom::common::db::DbKey<db::AppUser>" in output

    def test_renamed_module_alias(self, config):
        resolver = DeclResolver(
            modules(
                module("common", struct("Point", [fld("x", DOUBLE)])),
                module("other.common", struct("Tag", [fld("t", STRING)])),
                module(
                    "app",
                    struct("Shape", [fld("origin", ref("common.Point")), fld("tag", ref("other.common.Tag"))], table()),
                ),
            )
        )
        output = generate(SeaQueryBackend, resolver, config)

        assert "use adlgen::common;\nuse adlgen::other::common as common_2;" in output
        assert "ColumnSpec<common_2::Tag>" in output

    def test_custom_type_reached_through_aliases(self, config):
        resolver = DeclResolver(
            modules(
                *std_modules(),
                module(
                    "app",
                    struct("User", [fld("email", STRING)]),
                    typedef("UserKey", ref("common.db.DbKey", ref("app.User"))),
                    typedef("OwnerKey", ref("app.UserKey")),
                    struct(
                        "Task",
                        [fld("owner", ref("app.OwnerKey")), fld("reviewer", nullable(ref("app.UserKey")))],
                        table(),
                    ),
                ),
            )
        )
        output = generate(SeaQueryBackend, resolver, config)

        assert "use adlgen::app;" in output
        assert "pub fn owner() -> ColumnSpec<adlrt::custom::common::db::DbKey<app::User>> {" in output
        assert "pub fn reviewer() -> ColumnSpec<std::option::Option<adlrt::custom::common::db::DbKey<app::User>>> {" in output
