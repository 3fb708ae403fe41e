# app/core/test_errors.py
from app.core.errors import ServiceError, NotFound, Internal

def test_status_code_defaults_to_class_value():
    assert NotFound("帖子不存在").status_code == 404
    assert Internal("x").error_code == "INTERNAL"

def test_status_code_can_be_overridden_per_instance():
    error = ServiceError("teapot", status_code=418)

    assert error.status_code == 418
    assert error.message == "teapot"
    assert ServiceError("x").status_code == 500
