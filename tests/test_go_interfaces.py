import pytest

from interfacery.errors import MalformedMember, SignatureProviderError
from interfacery.extractors.golang.interfaces import (
    extract_interfaces_from_file,
    extract_interfaces_from_source,
    parse_method,
)

USER_SERVICE = """
package service

import (
	"context"
	"io"
)

// UserService manages users.
type UserService interface {
	io.Closer
	// GetUserByID returns one user.
	GetUserByID(ctx context.Context, id string) (*User, error)
	ListUsers(ctx context.Context) ([]User, error)
	CreateUser(ctx context.Context, user User) error
	/* Rename changes
	   a user's name. */
	Rename(ctx context.Context, from, to string) error
}
"""


def test_extracts_methods_in_declaration_order():
    decls = extract_interfaces_from_source(USER_SERVICE, import_identity="example.com/svc")
    assert len(decls) == 1

    iface = decls[0].signatures
    assert iface.interface_name == "UserService"
    assert iface.package_name == "service"
    assert iface.import_identity == "example.com/svc"
    assert [m.name for m in iface.methods] == ["GetUserByID", "ListUsers", "CreateUser", "Rename"]

    get = iface.methods[0]
    assert [(p.name, p.type_expr) for p in get.parameters] == [("ctx", "context.Context"), ("id", "string")]
    assert [r.type_expr for r in get.returns] == ["*User", "error"]
    assert get.has_context_parameter

    rename = iface.methods[3]
    assert [(p.name, p.type_expr) for p in rename.parameters] == [
        ("ctx", "context.Context"),
        ("from", "string"),
        ("to", "string"),
    ]


def test_embedded_interface_is_skipped_and_reported():
    decl = extract_interfaces_from_source(USER_SERVICE)[0]
    assert len(decl.skipped) == 1
    assert decl.skipped[0].interface_name == "UserService"
    assert "io.Closer" in str(decl.skipped[0])


def test_declaration_line_survives_block_comments():
    src = "package p\n/*\n\n*/\ntype A interface {\n\tDo() error\n}\n"
    decl = extract_interfaces_from_source(src)[0]
    assert decl.line == 5


def test_unnamed_params_get_positional_names():
    sig = parse_method("Put(context.Context, string, []byte) error")
    assert [(p.name, p.type_expr) for p in sig.parameters] == [
        ("arg0", "context.Context"),
        ("arg1", "string"),
        ("arg2", "[]byte"),
    ]


def test_variadic_and_named_results():
    sig = parse_method("Tag(id int64, tags ...string) (n int, err error)")
    assert [(p.name, p.type_expr) for p in sig.parameters] == [("id", "int64"), ("tags", "...string")]
    assert [r.type_expr for r in sig.returns] == ["int", "error"]
    assert not sig.has_context_parameter


def test_single_unparenthesized_result():
    sig = parse_method("Count() int")
    assert sig.parameters == ()
    assert [r.type_expr for r in sig.returns] == ["int"]


def test_nested_brackets_stay_in_one_type():
    sig = parse_method("Merge(a map[string][]int, b func(int) error) map[string]int")
    assert [p.type_expr for p in sig.parameters] == ["map[string][]int", "func(int) error"]
    assert [r.type_expr for r in sig.returns] == ["map[string]int"]


def test_multiline_parameter_list():
    src = """package p
type Store interface {
	Save(
		ctx context.Context,
		key string,
		value []byte,
	) error
}
"""
    sig = extract_interfaces_from_source(src)[0].signatures.methods[0]
    assert sig.name == "Save"
    assert [p.name for p in sig.parameters] == ["ctx", "key", "value"]


@pytest.mark.parametrize("member", ["Reader", "io.Closer", "~int | ~string", "Broken(a string"])
def test_non_methods_raise(member):
    with pytest.raises(MalformedMember):
        parse_method(member)


def test_names_without_type_raise():
    with pytest.raises(MalformedMember) as exc:
        parse_method("Bad(a, b string, c)")
    assert exc.value.method_name == "Bad"


def test_type_group_and_generic_interfaces():
    src = """package repo

type (
	Reader interface {
		GetItemByID(id string) (*Item, error)
	}
	Count int
)

type Repo[T any] interface {
	ListItems() ([]T, error)
}
"""
    decls = extract_interfaces_from_source(src)
    assert [d.name for d in decls] == ["Reader", "Repo"]
    assert decls[0].signatures.methods[0].name == "GetItemByID"
    assert [r.type_expr for r in decls[1].signatures.methods[0].returns] == ["[]T", "error"]


def test_interface_name_filter():
    src = "package p\ntype A interface { Do() }\ntype B interface { Undo() }\n"
    decls = extract_interfaces_from_source(src, interface_name="B")
    assert [d.name for d in decls] == ["B"]


def test_semicolon_separated_members():
    src = "package p\ntype A interface { Open() error; Close() error }\n"
    methods = extract_interfaces_from_source(src)[0].signatures.methods
    assert [m.name for m in methods] == ["Open", "Close"]


def test_extract_from_file(tmp_path):
    f = tmp_path / "user.go"
    f.write_text(USER_SERVICE, encoding="utf-8")
    decls = extract_interfaces_from_file(f, file_path="user.go")
    assert decls[0].signatures.file_path == "user.go"


def test_missing_file_raises_provider_error(tmp_path):
    with pytest.raises(SignatureProviderError):
        extract_interfaces_from_file(tmp_path / "nope.go")


def test_comment_markers_inside_strings_do_not_hide_interfaces():
    src = """package service

const staticGlob = "/static/*"
var braces = "{ } */"
var open = '{'

type UserService interface {
	GetUserByID(ctx context.Context, id string) (*User, error)
	ListUsers(ctx context.Context) ([]User, error)
}

/* helpers */
func helper() {}
"""
    decls = extract_interfaces_from_source(src)
    assert [d.name for d in decls] == ["UserService"]
    assert [m.name for m in decls[0].signatures.methods] == ["GetUserByID", "ListUsers"]


def test_line_comment_with_block_marker_inside_interface_body():
    src = """package service

type UserService interface {
	// matches routes under /users/*
	GetUserByID(ctx context.Context, id string) (*User, error) // returns {user}
	/* } not the end */
	DeleteUser(ctx context.Context, id string) error
}

type Other interface {
	Ping() error
}
"""
    decls = extract_interfaces_from_source(src)
    assert [d.name for d in decls] == ["UserService", "Other"]
    assert [m.name for m in decls[0].signatures.methods] == ["GetUserByID", "DeleteUser"]
    assert decls[0].skipped == ()


def test_comment_inside_parameter_list_is_ignored():
    sig = parse_method("Find(ctx context.Context /* ctx */, q string) ([]string, error)")
    assert [(p.name, p.type_expr) for p in sig.parameters] == [("ctx", "context.Context"), ("q", "string")]
