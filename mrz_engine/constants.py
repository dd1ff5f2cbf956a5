from __future__ import annotations

import string

FILLER = "<"
WEIGHTS = (7, 3, 1)

ALPHABET_MAPPING: dict[str, int] = {letter: value for value, letter in enumerate(string.ascii_uppercase, start=10)}

TD1_LINE_COUNT = 3
TD1_CHARACTERS_PER_LINE = 30
TD2_CHARACTERS_PER_LINE = 36
TD3_CHARACTERS_PER_LINE = 44

VISA_MARKER = "V"

DOCUMENT_TYPE_FIELD = "document_type"
COUNTRY_CODE_FIELD = "country_code"
NAME_FIELD = "name"
DOCUMENT_NUMBER_FIELD = "document_number"
NATIONALITY_FIELD = "nationality"
BIRTHDATE_FIELD = "birthdate"
SEX_FIELD = "sex"
EXPIRY_DATE_FIELD = "expiry_date"
OPTIONAL_DATA_1_FIELD = "optional_data_1"
OPTIONAL_DATA_2_FIELD = "optional_data_2"
FINAL_CHECK_DIGIT_FIELD = "final_check_digit"
