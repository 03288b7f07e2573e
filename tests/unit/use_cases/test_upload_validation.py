import pytest

from src.app.use_cases.documents.upload_validation import (
    EMPLOYEE_DOCUMENT_TYPES,
    MAX_UPLOAD_BYTES,
    POLICY_TYPES,
    RESUME_TYPES,
    normalize_content_type,
    safe_filename,
    validate_upload,
)


def test_exactly_the_limit_is_accepted():
    assert validate_upload(MAX_UPLOAD_BYTES, "application/pdf", EMPLOYEE_DOCUMENT_TYPES) is None


def test_one_byte_over_the_limit_is_rejected():
    error = validate_upload(MAX_UPLOAD_BYTES + 1, "application/pdf", EMPLOYEE_DOCUMENT_TYPES)
    assert error.code == "FILE_TOO_LARGE"
    assert "10MB" in error.message


def test_empty_upload_is_rejected():
    assert validate_upload(0, "application/pdf", EMPLOYEE_DOCUMENT_TYPES).code == "EMPTY_FILE"


@pytest.mark.parametrize(
    "content_type,allowed,accepted",
    [
        ("image/png", EMPLOYEE_DOCUMENT_TYPES, True),
        ("IMAGE/JPEG", EMPLOYEE_DOCUMENT_TYPES, True),
        ("application/pdf; charset=binary", EMPLOYEE_DOCUMENT_TYPES, True),
        ("text/plain", EMPLOYEE_DOCUMENT_TYPES, False),
        ("text/plain", POLICY_TYPES, True),
        ("image/png", POLICY_TYPES, False),
        ("image/png", RESUME_TYPES, False),
        ("application/x-msdownload", RESUME_TYPES, False),
        ("", RESUME_TYPES, False),
    ],
)
def test_content_type_allow_lists(content_type, allowed, accepted):
    error = validate_upload(10, content_type, allowed)
    if accepted:
        assert error is None
    else:
        assert error.code == "INVALID_FILE_TYPE"


def test_custom_limit():
    assert validate_upload(11, "text/plain", POLICY_TYPES, max_bytes=10).code == "FILE_TOO_LARGE"


def test_normalize_content_type():
    assert normalize_content_type(" Application/PDF ; q=1") == "application/pdf"
    assert normalize_content_type(None) == ""


def test_safe_filename_strips_paths_and_quotes():
    assert safe_filename("../../etc/passwd") == "passwd"
    assert safe_filename("C:\\Users\\bob\\id.pdf") == "id.pdf"
    assert safe_filename('we"ird\r\n.pdf') == "weird.pdf"
    assert safe_filename("", default="policy") == "policy"
    assert len(safe_filename("a" * 400)) == 255
