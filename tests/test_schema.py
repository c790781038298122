"""
Tests for schema validation.
"""

import pytest
from jobboard.schema import validate_filters, validate_job, validate_job_update


class TestValidateJob:
    """Test create payload validation."""

    def test_valid_job(self, new_job):
        """Valid payload should have no errors."""
        assert validate_job(new_job) == []

    def test_minimal_job(self):
        """Salary and equity are optional."""
        assert validate_job({"title": "engineer", "companyHandle": "c1"}) == []

    def test_missing_required_field(self):
        """Missing title should error."""
        errors = validate_job({"companyHandle": "c1"})
        assert any("title" in err for err in errors)

    def test_missing_company_handle(self):
        errors = validate_job({"title": "engineer"})
        assert any("companyHandle" in err for err in errors)

    def test_empty_title(self):
        """Blank title should error."""
        errors = validate_job({"title": "   ", "companyHandle": "c1"})
        assert len(errors) > 0

    def test_unknown_field(self):
        errors = validate_job({"title": "x", "companyHandle": "c1", "id": 3})
        assert any("Unknown field: id" in err for err in errors)

    @pytest.mark.parametrize("salary", [-1, "100", 1.5, True])
    def test_invalid_salary(self, salary):
        errors = validate_job({"title": "x", "companyHandle": "c1", "salary": salary})
        assert any("salary" in err for err in errors)

    @pytest.mark.parametrize("equity", ["1.5", "-0.1", "abc", "NaN", 0.5])
    def test_invalid_equity(self, equity):
        errors = validate_job({"title": "x", "companyHandle": "c1", "equity": equity})
        assert any("equity" in err for err in errors)

    @pytest.mark.parametrize("equity", ["0", "0.05", "1", "1.0"])
    def test_valid_equity(self, equity):
        assert validate_job({"title": "x", "companyHandle": "c1", "equity": equity}) == []

    def test_collects_all_errors(self):
        """All problems are reported at once."""
        errors = validate_job({"salary": -5, "equity": "2"})
        assert len(errors) == 4


class TestValidateJobUpdate:
    """Test partial update validation."""

    def test_valid_update(self):
        assert validate_job_update({"salary": 11000, "equity": "1"}) == []

    def test_empty_update_is_left_to_builder(self):
        assert validate_job_update({}) == []

    @pytest.mark.parametrize("field", ["id", "companyHandle", "company_handle"])
    def test_fixed_fields_rejected(self, field):
        errors = validate_job_update({field: "c2"})
        assert errors == [f"Field '{field}' cannot be updated"]

    def test_blank_title_rejected(self):
        errors = validate_job_update({"title": ""})
        assert any("title" in err for err in errors)

    def test_clearing_salary_allowed(self):
        """Salary and equity may be set back to NULL."""
        assert validate_job_update({"salary": None, "equity": None}) == []


class TestValidateFilters:
    """Test find_all filter validation."""

    def test_no_filter_sentinel(self):
        assert validate_filters({"noFilter": True}) == []

    def test_all_filters(self):
        assert validate_filters({"title": "eng", "minSalary": 0, "hasEquity": False}) == []

    def test_unknown_filter(self):
        errors = validate_filters({"foo": 1, "title": "x", "bar": 2})
        assert errors == ["Invalid filters: foo, bar"]

    def test_bad_min_salary(self):
        errors = validate_filters({"minSalary": -10})
        assert any("minSalary" in err for err in errors)

    def test_bad_has_equity(self):
        errors = validate_filters({"hasEquity": "true"})
        assert any("hasEquity" in err for err in errors)

    def test_bad_title(self):
        errors = validate_filters({"title": 5})
        assert any("title" in err for err in errors)
