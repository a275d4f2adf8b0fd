"""Tool dispatch: argument validation, command construction, response text."""

from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND
import pytest

from shadcn_mcp.config import CliConfig
from shadcn_mcp.dispatcher import ToolDispatcher

TOOL_NAMES = ["init_shadcn", "add_component", "list_components"]


def _valid_args(name):
    if name == "add_component":
        return {"directory": "/p", "components": ["button"]}
    return {"directory": "/p"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "arguments",
    [None, {}, {"directory": "/p"}, {"directory": "/p", "components": ["button"]}],
)
async def test_unknown_tool_is_method_not_found(spy_runner, arguments):
    dispatcher = ToolDispatcher(runner=spy_runner)

    with pytest.raises(McpError) as exc:
        await dispatcher.dispatch("remove_component", arguments)

    assert exc.value.error.code == METHOD_NOT_FOUND
    assert "remove_component" in exc.value.error.message
    assert spy_runner.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "arguments",
    [
        {"directory": "/p"},
        {"directory": "/p", "components": None},
        {"directory": "/p", "components": "button"},
        {"directory": "/p", "components": {"name": "button"}},
        {"directory": "/p", "components": []},
    ],
)
async def test_add_component_rejects_bad_components_before_spawning(spy_runner, arguments):
    dispatcher = ToolDispatcher(runner=spy_runner)

    with pytest.raises(McpError) as exc:
        await dispatcher.dispatch("add_component", arguments)

    assert exc.value.error.code == INVALID_PARAMS
    assert spy_runner.calls == []


@pytest.mark.asyncio
async def test_add_component_rejects_non_string_component(spy_runner):
    dispatcher = ToolDispatcher(runner=spy_runner)

    with pytest.raises(McpError) as exc:
        await dispatcher.dispatch("add_component", {"directory": "/p", "components": ["button", 3]})

    assert exc.value.error.code == INVALID_PARAMS
    assert spy_runner.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("components", [[""], ["button", ""]])
async def test_add_component_rejects_empty_component_name(spy_runner, components):
    dispatcher = ToolDispatcher(runner=spy_runner)

    with pytest.raises(McpError) as exc:
        await dispatcher.dispatch("add_component", {"directory": "/p", "components": components})

    assert exc.value.error.code == INVALID_PARAMS
    assert "components" in exc.value.error.message
    assert spy_runner.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("name", TOOL_NAMES)
@pytest.mark.parametrize("directory", ["<missing>", None, "", 42])
async def test_missing_or_bad_directory_is_invalid_params(spy_runner, name, directory):
    arguments = _valid_args(name)
    if directory == "<missing>":
        del arguments["directory"]
    else:
        arguments["directory"] = directory
    dispatcher = ToolDispatcher(runner=spy_runner)

    with pytest.raises(McpError) as exc:
        await dispatcher.dispatch(name, arguments)

    assert exc.value.error.code == INVALID_PARAMS
    assert spy_runner.calls == []


@pytest.mark.asyncio
async def test_init_shadcn_response_order(spy_runner):
    dispatcher = ToolDispatcher(runner=spy_runner)

    text = await dispatcher.dispatch("init_shadcn", {"directory": "/p"})

    assert text == "shadcn-ui initialized in /p\nOK\n"
    assert text.index("/p") < text.index("OK")
    assert spy_runner.calls == [(["npx", "shadcn-ui@latest", "init", "-y"], "/p")]


@pytest.mark.asyncio
async def test_add_component_passes_components_in_order(make_spy):
    spy = make_spy(stdout="added", stderr="warn")
    dispatcher = ToolDispatcher(runner=spy)

    text = await dispatcher.dispatch(
        "add_component", {"directory": "/p", "components": ["button", "card"]}
    )

    argv, cwd = spy.calls[0]
    assert " ".join(argv).endswith("add button card")
    assert argv == ["npx", "shadcn-ui@latest", "add", "button", "card"]
    assert cwd == "/p"
    assert text == "Added components to /p\nadded\nwarn"


@pytest.mark.asyncio
async def test_component_names_are_not_shell_parsed(make_spy):
    spy = make_spy(stdout="ok")
    dispatcher = ToolDispatcher(runner=spy)

    await dispatcher.dispatch(
        "add_component", {"directory": "/p q", "components": ["button; rm -rf /"]}
    )

    argv, cwd = spy.calls[0]
    assert argv[-1] == "button; rm -rf /"
    assert cwd == "/p q"


@pytest.mark.asyncio
async def test_list_components_empty_output_is_empty_text(make_spy):
    spy = make_spy(stdout="", stderr="")
    dispatcher = ToolDispatcher(runner=spy)

    text = await dispatcher.dispatch("list_components", {"directory": "/p"})

    assert text == ""
    assert spy.calls == [(["npx", "shadcn-ui@latest", "list"], "/p")]


@pytest.mark.asyncio
async def test_list_components_prefers_stdout_then_stderr(make_spy):
    dispatcher = ToolDispatcher(runner=make_spy(stdout="button\ncard\n", stderr="noise"))
    assert await dispatcher.dispatch("list_components", {"directory": "/p"}) == "button\ncard\n"

    dispatcher = ToolDispatcher(runner=make_spy(stdout="", stderr="only stderr"))
    assert await dispatcher.dispatch("list_components", {"directory": "/p"}) == "only stderr"


@pytest.mark.asyncio
@pytest.mark.parametrize("name", TOOL_NAMES)
async def test_runner_failure_is_internal_error(make_spy, name):
    spy = make_spy(error="boom")
    dispatcher = ToolDispatcher(runner=spy)

    with pytest.raises(McpError) as exc:
        await dispatcher.dispatch(name, _valid_args(name))

    assert exc.value.error.code == INTERNAL_ERROR
    assert exc.value.error.message == "boom"
    assert len(spy.calls) == 1


@pytest.mark.asyncio
async def test_cli_config_changes_runner_and_package(spy_runner):
    dispatcher = ToolDispatcher(
        runner=spy_runner, cli=CliConfig(runner="pnpm dlx", package="shadcn@latest")
    )

    await dispatcher.dispatch("list_components", {"directory": "/p"})

    assert spy_runner.calls[0][0] == ["pnpm", "dlx", "shadcn@latest", "list"]


@pytest.mark.asyncio
async def test_extra_arguments_are_ignored(spy_runner):
    dispatcher = ToolDispatcher(runner=spy_runner)

    text = await dispatcher.dispatch("init_shadcn", {"directory": "/p", "force": True})

    assert text.startswith("shadcn-ui initialized in /p")
