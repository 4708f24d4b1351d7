from dusk.runtime import Env
from dusk.runtime.objects import Integer, String


# ===== Lookup And Mutation =====
def test_env_lookup_walks_parent_chain() -> None:
    root = Env({"x": Integer(1)})
    middle = Env(parent_env=root)
    leaf = Env(parent_env=middle)

    assert leaf["x"] == Integer(1)
    assert "x" in leaf
    assert "y" not in leaf


def test_env_define_shadows_parent_binding() -> None:
    root = Env({"x": Integer(1)})
    leaf = Env(parent_env=root)

    leaf.define("x", Integer(99))

    assert leaf["x"] == Integer(99)
    assert root["x"] == Integer(1)


def test_env_setitem_updates_nearest_ancestor_binding() -> None:
    root = Env({"x": Integer(1)})
    middle = Env({"x": Integer(10)}, parent_env=root)
    leaf = Env(parent_env=middle)

    leaf["x"] = Integer(11)

    assert middle["x"] == Integer(11)
    assert root["x"] == Integer(1)


# ===== Introspection Shape =====
def test_env_all_vars_nested_scope_shape() -> None:
    root = Env({"x": Integer(1)}, name="root")
    leaf = Env({"name": String("alice")}, parent_env=root, name="leaf")

    assert leaf.all_vars() == {
        "name": "leaf",
        "self": [("name", String("alice"))],
        "parent_env": {
            "name": "root",
            "self": [("x", Integer(1))],
            "parent_env": None,
        },
    }
