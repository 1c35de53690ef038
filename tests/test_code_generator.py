import re

from backend.app.services.code_generator import CODE_ALPHABET, generate_linking_code, make_code_factory


def test_alphabet_excludes_ambiguous_characters():
    assert len(set(CODE_ALPHABET)) >= 32
    for ambiguous in "0O1I":
        assert ambiguous not in CODE_ALPHABET


def test_generated_code_has_prefix_and_length():
    code = generate_linking_code()
    assert re.fullmatch(r"STU-[A-Z2-9]{6}", code)
    assert all(ch in CODE_ALPHABET for ch in code[4:])


def test_codes_vary():
    codes = {generate_linking_code() for _ in range(50)}
    assert len(codes) > 1


def test_code_factory_binds_prefix_and_length():
    factory = make_code_factory(prefix="KID-", length=8)
    code = factory()
    assert code.startswith("KID-")
    assert len(code) == 12
