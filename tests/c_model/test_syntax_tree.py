import json

import pytest

from c2cs.c_model import (CCallingConvention, CType, ModelValidationError,
                          abstract_syntax_tree_from_dict,
                          load_abstract_syntax_tree)


def _loc(kind="Test", line=1):
    return {"kind": kind, "file_name": "sample.h", "line": line}


def _int():
    return {"name": "int", "size_of": 4, "align_of": 4, "is_system_type": True}


@pytest.fixture
def model():
    return {
        "function_externs": [
            {
                "name": "sum",
                "location": _loc("Function", 10),
                "calling_convention": "C",
                "return_type": _int(),
                "parameters": [
                    {"name": "a", "location": _loc("Parameter", 10), "type": _int()},
                    {"name": "", "location": _loc("Parameter", 10), "type": _int(), "is_read_only": True},
                ],
            }
        ],
        "records": [
            {
                "name": "Outer",
                "location": _loc("Struct", 20),
                "type": {"name": "Outer", "size_of": 8, "align_of": 4},
                "fields": [
                    {"name": "inner", "location": _loc("Field", 21),
                     "type": {"name": "Outer_inner", "size_of": 8, "align_of": 4},
                     "offset": 0, "padding": 0},
                ],
                "nested_records": [
                    {
                        "name": "Outer_inner",
                        "location": _loc("Struct", 22),
                        "type": {"name": "Outer_inner", "size_of": 8, "align_of": 4},
                        "fields": [
                            {"name": "a", "location": _loc("Field", 23), "type": _int(), "offset": 0, "padding": 0},
                            {"name": "b", "location": _loc("Field", 24), "type": _int(), "offset": 4, "padding": 0},
                        ],
                    }
                ],
            }
        ],
        "enums": [
            {
                "name": "Big",
                "location": _loc("Enum", 30),
                "integer_type": {"name": "long", "size_of": 8, "align_of": 8, "is_system_type": True},
                "values": [
                    {"name": "BIG_MIN", "location": _loc("EnumValue", 31), "value": -9223372036854775808},
                    {"name": "BIG_MAX", "location": _loc("EnumValue", 32), "value": 9223372036854775807},
                ],
            }
        ],
    }


def test_from_dict_builds_tree(model):
    tree = abstract_syntax_tree_from_dict(model)

    assert len(tree) == 3
    function = tree.function_externs[0]
    assert function.calling_convention is CCallingConvention.C
    assert function.return_type == CType("int", "int", 4, 4, None, True)
    assert [p.name for p in function.parameters] == ["a", ""]
    assert function.parameters[1].is_read_only

    outer = tree.records[0]
    assert outer.nested_records[0].name == "Outer_inner"
    assert [f.offset for f in outer.nested_records[0].fields] == [0, 4]

    values = tree.enums[0].values
    assert values[0].value == -9223372036854775808
    assert values[1].value == 9223372036854775807


def test_original_name_defaults_to_name(model):
    tree = abstract_syntax_tree_from_dict(model)
    assert tree.records[0].type.original_name == "Outer"


def test_unknown_calling_convention_is_rejected(model):
    model["function_externs"][0]["calling_convention"] = "StdCall"
    with pytest.raises(ModelValidationError, match="function_externs/0/calling_convention"):
        abstract_syntax_tree_from_dict(model)


def test_missing_offset_is_rejected(model):
    del model["records"][0]["fields"][0]["offset"]
    with pytest.raises(ModelValidationError):
        abstract_syntax_tree_from_dict(model)


def test_unknown_section_is_rejected():
    with pytest.raises(ModelValidationError):
        abstract_syntax_tree_from_dict({"macros": []})


def test_empty_model_is_valid():
    tree = abstract_syntax_tree_from_dict({})
    assert len(tree) == 0


def test_load_from_file(tmp_path, model):
    path = tmp_path / "sample.json"
    path.write_text(json.dumps(model), encoding="utf-8")
    tree = load_abstract_syntax_tree(path)
    assert tree.function_externs[0].name == "sum"


def test_load_rejects_bad_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ModelValidationError):
        load_abstract_syntax_tree(path)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_abstract_syntax_tree(tmp_path / "missing.json")
