from c2cs.c_model import CodeLocation, CType


def test_ctype_equality_covers_every_field():
    base = CType("int", "int", 4, 4)
    assert base == CType("int", "int", 4, 4)
    assert base != CType("int", "int32_t", 4, 4)
    assert base != CType("int", "int", 4, 4, array_size=1)
    assert base != CType("int", "int", 4, 4, is_system_type=True)
    assert hash(base) == hash(CType("int", "int", 4, 4))


def test_ctype_is_array():
    assert not CType("int", "int", 4, 4).is_array
    assert CType("int", "int", 16, 4, array_size=4).is_array
    # flexible array members still count as arrays
    assert CType("int", "int", 0, 4, array_size=0).is_array


def test_code_location_comment():
    location = CodeLocation("Function", "foo.h", 12, "2021-01-01 10:00:00")
    assert location.as_comment() == "// Function @ foo.h:12 2021-01-01 10:00:00"


def test_code_location_comment_without_timestamp():
    location = CodeLocation("Struct", "foo.h", 3)
    assert location.as_comment() == "// Struct @ foo.h:3"
