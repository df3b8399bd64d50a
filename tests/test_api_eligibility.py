"""Tests for the eligibility API endpoints."""

from datetime import date

import pytest
from fastapi.testclient import TestClient

ELIGIBILITY_URL = "/api/v1/eligibility"


class TestGetEligibility:
    """Tests for GET /eligibility."""

    def test_fifteen_year_old(self, client: TestClient) -> None:
        """Test the filters for the youngest workers."""
        response = client.get(ELIGIBILITY_URL, params={"age": 15})

        assert response.status_code == 200
        data = response.json()
        assert data["age_group"] == "MINOR_15_17"
        assert data["current_filter"]["query"]["minimum_age"] == {"lte": 15}
        assert "BAR_SERVICE" in data["current_filter"]["excluded_categories"]
        assert data["next_threshold_filter"]["query"]["minimum_age"] == {"equals": 16}
        assert data["next_unlock_age"] == 16
        assert data["unlock_message"] == "Unlocks in 1 year when you turn 16"
        assert data["preparation_tips"]

    def test_seventeen_year_old(self, client: TestClient) -> None:
        """Test that the 18 preview has no category exclusions."""
        data = client.get(ELIGIBILITY_URL, params={"age": 17}).json()

        assert data["next_threshold_filter"]["query"] == {"minimum_age": {"equals": 18}}
        assert data["next_threshold_filter"]["excluded_categories"] == []

    def test_young_adult(self, client: TestClient) -> None:
        """Test that young adults have nothing left to unlock."""
        data = client.get(ELIGIBILITY_URL, params={"age": 19}).json()

        assert data["current_filter"]["query"] == {"minimum_age": {"lte": 19}}
        assert data["next_threshold_filter"] is None
        assert data["next_unlock_age"] is None
        assert data["unlock_message"] == ""
        assert data["preparation_tips"] == []

    @pytest.mark.parametrize("age", [14, 21])
    def test_out_of_range(self, client: TestClient, age: int) -> None:
        """Test that unsupported ages return 400."""
        response = client.get(ELIGIBILITY_URL, params={"age": age})

        assert response.status_code == 400
        assert response.json()["detail"]["field"] == "age"


class TestClassifyWorker:
    """Tests for POST /eligibility/classify."""

    def test_classify_age(self, client: TestClient) -> None:
        """Test classifying a raw age."""
        response = client.post(f"{ELIGIBILITY_URL}/classify", json={"age": 17})

        assert response.status_code == 200
        assert response.json() == {"age": 17, "age_group": "MINOR_15_17", "is_minor": True}

    def test_classify_birth_date(self, client: TestClient) -> None:
        """Test classifying from a birth date."""
        born = date(date.today().year - 19, 1, 1)

        response = client.post(
            f"{ELIGIBILITY_URL}/classify", json={"birth_date": born.isoformat()}
        )

        assert response.status_code == 200
        assert response.json()["age_group"] == "YOUNG_ADULT_18_20"

    def test_birth_date_out_of_range(self, client: TestClient) -> None:
        """Test that a child's birth date returns 400 naming birth_date."""
        born = date(date.today().year - 10, 1, 1)

        response = client.post(
            f"{ELIGIBILITY_URL}/classify", json={"birth_date": born.isoformat()}
        )

        assert response.status_code == 400
        assert response.json()["detail"]["field"] == "birth_date"

    def test_age_out_of_range(self, client: TestClient) -> None:
        """Test that a 30 year old is rejected."""
        response = client.post(f"{ELIGIBILITY_URL}/classify", json={"age": 30})

        assert response.status_code == 400

    @pytest.mark.parametrize(
        "body",
        [{}, {"age": 16, "birth_date": "2009-01-01"}],
    )
    def test_exactly_one_source(self, client: TestClient, body: dict) -> None:
        """Test that exactly one of age or birth_date is required."""
        response = client.post(f"{ELIGIBILITY_URL}/classify", json=body)

        assert response.status_code == 422


class TestJobPolicy:
    """Tests for POST /eligibility/job-policy."""

    def test_low_request_raised_to_baseline(self, client: TestClient) -> None:
        """Test that a driving job cannot be opened to 16 year olds."""
        response = client.post(
            f"{ELIGIBILITY_URL}/job-policy",
            json={"category": "DRIVING", "requested_minimum_age": 16},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["risk_category"] == "HIGH_RISK"
        assert data["minimum_age"] == 18
        assert data["was_minimum_age_adjusted"] is True
        assert data["age_restriction_display"] == "18+"
        assert data["policy_version"] == "1.0.0"

    def test_defaults(self, client: TestClient) -> None:
        """Test a babysitting job with no employer preferences."""
        data = client.post(
            f"{ELIGIBILITY_URL}/job-policy", json={"category": "BABYSITTING"}
        ).json()

        assert data["minimum_age"] == 15
        assert data["requires_adult_present"] is True
        assert data["was_minimum_age_adjusted"] is False

    def test_requested_age_out_of_range(self, client: TestClient) -> None:
        """Test that an unsupported requested age returns 400."""
        response = client.post(
            f"{ELIGIBILITY_URL}/job-policy",
            json={"category": "TUTORING", "requested_minimum_age": 25},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["field"] == "requested_minimum_age"

    def test_unknown_category(self, client: TestClient) -> None:
        """Test that unknown categories are rejected."""
        response = client.post(f"{ELIGIBILITY_URL}/job-policy", json={"category": "SPACE"})

        assert response.status_code == 422
