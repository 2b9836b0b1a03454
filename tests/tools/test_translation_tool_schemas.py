"""Smoke tests for the tool definitions advertised to the host."""

import pytest

from verba_mcp.tools.translation_tools import TranslationTools

EXPECTED_REQUIRED = {
    "list_projects": [],
    "get_project": ["projectId"],
    "list_keys": ["projectId"],
    "add_key": ["projectId", "key", "defaultValue"],
    "set_translation": ["projectId", "key", "locale", "value"],
    "translate": ["projectId", "keys"],
    "list_untranslated": ["projectId"],
    "add_locale": ["projectId", "locale"],
    "delete_key": ["projectId", "key"],
}

ALLOWED_TYPES = {"string", "boolean", "number", "array"}


@pytest.fixture
def tool_schemas(registry, backend):
    tools = TranslationTools(registry, backend).get_tools()
    return {tool.name: tool for tool in tools}


def test_all_tools_advertised(tool_schemas):
    assert set(tool_schemas) == set(EXPECTED_REQUIRED)


@pytest.mark.parametrize("name,required", sorted(EXPECTED_REQUIRED.items()))
def test_required_parameters(tool_schemas, name, required):
    schema = tool_schemas[name].inputSchema

    assert schema["type"] == "object"
    assert schema["required"] == required


@pytest.mark.parametrize("name", sorted(EXPECTED_REQUIRED))
def test_parameters_are_flat_and_described(tool_schemas, name):
    tool = tool_schemas[name]
    assert tool.description

    for param, schema in tool.inputSchema["properties"].items():
        assert schema["type"] in ALLOWED_TYPES, param
        assert schema["description"], param
        if schema["type"] == "array":
            assert schema["items"] == {"type": "string"}


def test_list_keys_optional_parameters(tool_schemas):
    properties = tool_schemas["list_keys"].inputSchema["properties"]

    assert properties["search"]["type"] == "string"
    assert properties["locale"]["type"] == "string"
    assert properties["untranslated"]["type"] == "boolean"
    assert properties["page"]["type"] == "number"
    assert properties["pageSize"]["type"] == "number"


def test_translate_description_mentions_limit(tool_schemas):
    assert "Max 20 keys" in tool_schemas["translate"].description
    assert tool_schemas["translate"].inputSchema["properties"]["keys"]["type"] == "array"
