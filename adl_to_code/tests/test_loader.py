"""
Tests for loading JSON AST dumps.
"""

import json
from pathlib import Path

import pytest

from adl_to_code.pipeline.errors import SchemaLoadError
from adl_to_code.pipeline.schema_ast import AstLoader, DeclKind, ScopedName, TypeExpr

TEST_DATA = Path(__file__).parent / "test_data"


@pytest.fixture
def modules():
    return AstLoader().load_files([TEST_DATA / "app.json"])


def test_loads_all_modules(modules):
    assert sorted(modules) == ["app", "common.db", "common.http", "sys.types"]


def test_declaration_kinds(modules):
    decls = modules["app"].decls
    assert decls["User"].kind == DeclKind.STRUCT
    assert decls["Role"].kind == DeclKind.UNION
    assert decls["Role"].is_enum()
    assert decls["UserId"].kind == DeclKind.NEWTYPE
    assert decls["UserId"].type_params == []
    assert modules["common.db"].decls["DbKey"].type_params == ["T"]


def test_declaration_order_is_kept(modules):
    assert list(modules["app"].decls) == ["Role", "UserId", "User", "LoginReq", "Api"]


def test_fields_and_annotations(modules):
    user = modules["app"].decls["User"]
    assert [f.name for f in user.type_.fields] == ["id", "email", "fullName", "role"]
    assert user.annotations[0].key == ScopedName("common.db", "DbTable")
    assert user.annotations[0].value == {"tableName": "app_user"}

    email = user.type_.fields[1]
    assert email.annotations[0].key == ScopedName("common.db", "DbColumnName")
    assert email.annotations[0].value == "email_address"

    full_name = user.type_.fields[2]
    assert full_name.type_expr == TypeExpr.reference(ScopedName("sys.types", "Maybe"), TypeExpr.primitive("String"))


def test_field_defaults(modules):
    api = modules["app"].decls["Api"]
    login = api.type_.fields[0]
    assert login.has_default
    assert login.default == {"path": "/login", "security": "public"}
    assert not modules["app"].decls["User"].type_.fields[0].has_default


def test_keyed_annotations():
    data = {
        "name": "m",
        "decls": {
            "X": {
                "name": "X",
                "type_": {"struct_": {"typeParams": [], "fields": []}},
                "annotations": {"sys.annotations.Doc": "hello"},
            }
        },
    }
    [module] = AstLoader().load(data)
    assert module.decls["X"].annotations[0].key == ScopedName("sys.annotations", "Doc")


@pytest.mark.parametrize(
    "data",
    [
        3,
        {"name": "m", "decls": {"X": {"name": "X"}}},
        {"name": "m", "decls": {"X": {"name": "X", "type_": {"class_": {}}}}},
        {"name": "m", "decls": {"X": {"name": "X", "type_": {"type_": {"typeParams": []}}}}},
    ],
)
def test_malformed(data):
    with pytest.raises(SchemaLoadError):
        AstLoader().load(data)


def test_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(SchemaLoadError, match="invalid JSON"):
        AstLoader().load_files([path])


def test_later_files_win(tmp_path):
    first = tmp_path / "a.json"
    second = tmp_path / "b.json"
    first.write_text(json.dumps({"name": "m", "decls": {}}))
    second.write_text(json.dumps([{"name": "m", "decls": {"X": {"name": "X", "type_": {"struct_": {}}}}}]))
    modules = AstLoader().load_files([first, second])
    assert list(modules["m"].decls) == ["X"]
