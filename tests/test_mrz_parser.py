import pytest

from mrz_engine.exceptions import InvalidCharacter, InvalidDateCharacter, InvalidLineLength
from mrz_engine.layouts import TD2_LAYOUT, TD3_LAYOUT, LayoutParser
from mrz_engine.models import DocumentFormat, MRZField
from mrz_engine.parser import parse_mrz
from mrz_engine.settings import MRZSettings

TD1_LINES = [
    "I<UTOD231458907<<<<<<<<<<<<<<<",
    "7408122F1204159UTO<<<<<<<<<<<6",
    "ERIKSSON<<ANNA<MARIA<<<<<<<<<<",
]
TD2_LINES = [
    "I<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<",
    "D231458907UTO7408122F1204159<<<<<<<6",
]
TD2_VISA_LINES = [
    "V<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<",
    "L8988901C4XXX4009078F9612109<<<<<<<<",
]
TD3_LINE1 = "P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<"
TD3_LINE2 = "L898902C36UTO7408122F1204159ZE184226B<<<<<10"


def _replace(line: str, index: int, char: str) -> str:
    return line[:index] + char + line[index + 1:]


def test_parse_td1() -> None:
    result = parse_mrz(TD1_LINES)

    assert result.document_format is DocumentFormat.TD1
    assert result.is_valid is True
    assert result.is_visa is False
    assert result.issuing_state == "Utopia"
    assert result.value("name") == "ERIKSSON ANNA MARIA"
    assert result.value("document_type") == "I<"
    assert result.fields["document_number"].raw_value == "D23145890"
    assert result.fields["document_number"].check_digit == "7"
    assert result.value("birthdate") == "740812"
    assert result.value("sex") == "FEMALE"
    assert result.value("expiry_date") == "120415"
    assert result.value("nationality") == "UTO"
    assert result.fields["optional_data_1"].raw_value == "<" * 15
    assert result.fields["optional_data_1"].check_digit == ""
    assert result.fields["optional_data_2"].raw_value == "<" * 11
    assert result.value("final_check_digit") == "6"
    assert len(result.fields) == 11


def test_parse_td2() -> None:
    result = parse_mrz(TD2_LINES)

    assert result.document_format is DocumentFormat.TD2
    assert result.is_valid is True
    assert result.is_visa is False
    assert result.value("name") == "ERIKSSON ANNA MARIA"
    assert result.fields["optional_data_1"].raw_value == "<" * 7
    assert result.fields["optional_data_1"].check_digit == "6"
    assert result.fields["final_check_digit"].raw_value == "6"
    assert "optional_data_2" not in result.fields


def test_parse_td2_visa() -> None:
    result = parse_mrz(TD2_VISA_LINES)

    assert result.is_visa is True
    assert result.is_valid is True
    assert result.value("document_number") == "L8988901C"
    assert result.value("nationality") == "XXX"
    assert result.value("birthdate") == "400907"
    assert result.value("expiry_date") == "961210"
    assert result.fields["optional_data_1"].raw_value == "<" * 8
    assert result.fields["optional_data_1"].check_digit == ""
    assert "final_check_digit" not in result.fields
    assert result.value("final_check_digit") == ""


def test_parse_td3() -> None:
    result = parse_mrz([TD3_LINE1, TD3_LINE2])

    assert result.document_format is DocumentFormat.TD3
    assert result.is_valid is True
    assert result.is_visa is False
    assert result.issuing_state == "Utopia"
    assert result.value("name") == "ERIKSSON ANNA MARIA"
    assert result.value("document_number") == "L898902C3"
    assert result.fields["optional_data_1"].raw_value == "ZE184226B<<<<<"
    assert result.fields["optional_data_1"].is_valid is True
    assert result.value("final_check_digit") == "0"


def test_parse_from_single_string() -> None:
    assert parse_mrz(TD3_LINE1 + TD3_LINE2).is_valid is True
    assert parse_mrz(TD3_LINE1 + TD3_LINE2 + "\n").is_valid is True
    assert parse_mrz("".join(TD1_LINES)).is_valid is True
    assert parse_mrz("\n".join(TD2_VISA_LINES)).is_visa is True


def test_td3_tampered_document_check_digit() -> None:
    result = parse_mrz([TD3_LINE1, _replace(TD3_LINE2, 9, "7")])

    assert result.fields["document_number"].is_valid is False
    assert result.is_valid is False


@pytest.mark.parametrize(
    "index, char",
    [
        (0, "M"),  # document number
        (14, "5"),  # birthdate
        (26, "8"),  # expiry date
        (28, "Y"),  # personal number
        (43, "1"),  # final check digit
    ],
)
def test_td3_tamper_sensitivity(index: int, char: str) -> None:
    assert parse_mrz([TD3_LINE1, _replace(TD3_LINE2, index, char)]).is_valid is False


def test_td1_tampered_optional_data_fails_composite() -> None:
    result = parse_mrz([TD1_LINES[0], _replace(TD1_LINES[1], 18, "1"), TD1_LINES[2]])

    assert result.fields["document_number"].is_valid is True
    assert result.is_valid is False


def test_td2_tampered_expiry_check_digit() -> None:
    result = parse_mrz([TD2_LINES[0], _replace(TD2_LINES[1], 27, "8")])

    assert result.fields["expiry_date"].is_valid is False
    assert result.is_valid is False


@pytest.mark.parametrize(
    "index, char",
    [
        (28, "1"),  # personal number, outside every field check
        (35, "5"),  # final check digit
    ],
)
def test_td2_composite_mismatch_with_valid_fields(index: int, char: str) -> None:
    result = parse_mrz([TD2_LINES[0], _replace(TD2_LINES[1], index, char)])

    assert result.fields["document_number"].is_valid is True
    assert result.fields["birthdate"].is_valid is True
    assert result.fields["expiry_date"].is_valid is True
    assert result.is_valid is False


def test_td2_composite_compares_raw_final_character() -> None:
    parser = LayoutParser(layout=TD2_LAYOUT)
    fields = dict(parse_mrz(TD2_LINES).fields)

    fields["final_check_digit"] = MRZField(value="0", raw_value="6")
    assert parser.validate_all_check_digits(fields) is True

    fields["final_check_digit"] = MRZField(value="6", raw_value="0")
    assert parser.validate_all_check_digits(fields) is False


def test_td2_visa_tampered_document_number() -> None:
    result = parse_mrz([TD2_VISA_LINES[0], _replace(TD2_VISA_LINES[1], 9, "5")])

    assert result.is_visa is True
    assert result.is_valid is False


def test_ocr_confusions_are_repaired() -> None:
    line1 = _replace(TD3_LINE1, 7, "1")
    line2 = _replace(_replace(TD3_LINE2, 15, "O"), 20, "P")

    result = parse_mrz([line1, line2])

    assert result.value("name") == "ERIKSSON ANNA MARIA"
    assert result.fields["birthdate"].raw_value == "740812"
    assert result.value("sex") == "FEMALE"
    assert result.is_valid is True


def test_blank_birthdate_with_filler_check_digit() -> None:
    line2 = "L898902C36UTO<<<<<<<F1204159ZE184226B<<<<<10"

    result = parse_mrz([TD3_LINE1, line2])

    assert result.value("birthdate") == "<<<<<<"
    assert result.fields["birthdate"].check_digit == "0"
    assert result.fields["birthdate"].is_valid is True
    assert result.is_valid is True


def test_invalid_date_character_aborts_parse() -> None:
    with pytest.raises(InvalidDateCharacter):
        parse_mrz([TD3_LINE1, _replace(TD3_LINE2, 15, "X")])


def test_invalid_character_aborts_parse() -> None:
    with pytest.raises(InvalidCharacter):
        parse_mrz([TD3_LINE1, _replace(TD3_LINE2, 3, "#")])


def test_layout_parser_checks_lines() -> None:
    parser = LayoutParser(layout=TD3_LAYOUT)

    with pytest.raises(InvalidLineLength):
        parser.parse([TD3_LINE1])
    with pytest.raises(InvalidLineLength):
        parser.parse([TD3_LINE1, TD3_LINE2[:-1]])


def test_issuing_state_resolution() -> None:
    germany = "P<D<<" + TD3_LINE1[5:]
    assert parse_mrz([germany, TD3_LINE2]).issuing_state == "Germany"

    unknown = "P<ZZZ" + TD3_LINE1[5:]
    assert parse_mrz([unknown, TD3_LINE2]).issuing_state == "Unknown"
    assert parse_mrz([unknown, TD3_LINE2], settings=MRZSettings(unknown_issuing_state="N/A")).issuing_state == "N/A"


def test_result_is_immutable() -> None:
    result = parse_mrz(TD1_LINES)

    with pytest.raises(ValueError):
        result.is_valid = False
    with pytest.raises(TypeError):
        result.fields["document_number"] = result.fields["name"]
    with pytest.raises(TypeError):
        del result.fields["name"]
