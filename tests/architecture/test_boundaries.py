from pytest_archon import archrule


def test_primitives_isolation() -> None:
    """
    Primitives layer is the lowest level.
    It must not import from domain, ports, undo, or adapters.
    """
    (
        archrule("primitives_isolation")
        .match("change_history.primitives*")
        .should_not_import("change_history.domain*")
        .should_not_import("change_history.ports*")
        .should_not_import("change_history.undo*")
        .should_not_import("change_history.adapters*")
        .check("change_history")
    )


def test_domain_isolation() -> None:
    """
    Domain layer (records and reference entities) should be self-contained.
    Entities know nothing about the engine that observes them.
    """
    (
        archrule("domain_isolation")
        .match("change_history.domain*")
        .should_not_import("change_history.ports*")
        .should_not_import("change_history.undo*")
        .should_not_import("change_history.adapters*")
        .check("change_history")
    )


def test_ports_layering() -> None:
    """
    Ports (interfaces) should not depend on the engine or on adapters.
    """
    (
        archrule("ports_layering")
        .match("change_history.ports*")
        .should_not_import("change_history.undo*")
        .should_not_import("change_history.adapters*")
        .check("change_history")
    )


def test_engine_adapters_isolation() -> None:
    """
    The undo engine talks to the host through ports only.
    Adapters are plugins/implementations and must not leak into it.
    """
    (
        archrule("engine_adapters_isolation")
        .match("change_history.undo*")
        .should_not_import("change_history.adapters*")
        .check("change_history")
    )
