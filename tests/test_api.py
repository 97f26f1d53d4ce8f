"""
Tests for the calculator API endpoints.
"""

import pytest

# The client fixture is provided by conftest.py


class TestHealthCheck:
    """Test health check endpoint."""

    def test_health_check(self, client):
        """Test health check returns healthy status."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data


class TestLoanAPI:
    """Test loan and mortgage endpoints."""

    def test_calculate_amortization(self, client):
        """Test amortization schedule endpoint."""
        response = client.post(
            "/api/calculate/amortization",
            json={
                "principal": 100000,
                "down_payment": 20000,
                "annual_rate_pct": 5,
                "term_months": 360,
                "annual": True,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["financed_amount"] == 80000
        assert data["monthly_payment"] == 429.46
        assert len(data["schedule"]) == 360
        assert len(data["annual_schedule"]) == 30
        assert data["schedule"][-1]["remaining_balance"] == 0

    def test_annual_schedule_omitted_by_default(self, client):
        response = client.post(
            "/api/calculate/amortization",
            json={"principal": 12000, "annual_rate_pct": 6, "term_months": 12},
        )
        assert response.status_code == 200
        assert response.json()["annual_schedule"] is None

    @pytest.mark.parametrize(
        "payload",
        [
            {"principal": 0, "annual_rate_pct": 5, "term_months": 360},
            {"principal": 1000, "annual_rate_pct": 0, "term_months": 360},
            {"principal": 1000, "annual_rate_pct": 5, "term_months": 0},
            {"principal": 1000, "annual_rate_pct": 5, "term_months": 12, "down_payment": 1000},
        ],
    )
    def test_invalid_loan(self, client, payload):
        """Test invalid loans are rejected with 400."""
        response = client.post("/api/calculate/amortization", json=payload)
        assert response.status_code == 400

    def test_nan_principal_rejected(self, client):
        """Test NaN in the JSON body is rejected instead of echoed as null."""
        response = client.post(
            "/api/calculate/amortization",
            content='{"principal": NaN, "annual_rate_pct": 5, "term_months": 12}',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400

    def test_term_upper_bound(self, client):
        response = client.post(
            "/api/calculate/amortization",
            json={"principal": 1000, "annual_rate_pct": 5, "term_months": 10 ** 7},
        )
        assert response.status_code == 422

    def test_mortgage_term_upper_bound(self, client):
        response = client.post(
            "/api/calculate/mortgage",
            json={"home_price": 100000, "interest_rate_pct": 5, "loan_term_years": 1000},
        )
        assert response.status_code == 422

    def test_calculate_mortgage(self, client):
        response = client.post(
            "/api/calculate/mortgage",
            json={
                "home_price": 100000,
                "down_payment_percent": 20,
                "loan_term_years": 30,
                "interest_rate_pct": 5,
                "start_date": "2025-01-01",
                "property_tax_rate_pct": 1.2,
                "home_insurance_annual": 1200,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["loan_amount"] == 80000
        assert data["down_payment_amount"] == 20000
        assert data["monthly_payment"] == 429.46
        assert data["monthly_property_tax"] == 100
        assert data["monthly_home_insurance"] == 100
        assert data["total_monthly_cost"] == pytest.approx(629.46, abs=0.01)
        assert data["payoff_date"] == "2055-01-01"
        assert len(data["annual_schedule"]) == 30

    def test_calculate_interest_rate(self, client):
        response = client.post(
            "/api/calculate/interest-rate",
            json={"loan_amount": 80000, "term_months": 360, "monthly_payment": 429.46},
        )
        assert response.status_code == 200
        assert abs(response.json()["annual_rate_pct"] - 5.0) < 0.01

    def test_interest_rate_payment_too_small(self, client):
        response = client.post(
            "/api/calculate/interest-rate",
            json={"loan_amount": 80000, "term_months": 360, "monthly_payment": 100},
        )
        assert response.status_code == 400


class TestRateAPI:
    """Test rate conversion and inflation endpoints."""

    def test_rate_conversion(self, client):
        response = client.post(
            "/api/calculate/rate-conversion",
            json={
                "nominal_rate_pct": 6,
                "source_periods_per_year": 12,
                "target_periods_per_year": 1,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert abs(data["equivalent_rate_pct"] - 6.16778) < 1e-4
        assert abs(data["effective_annual_rate_pct"] - 6.16778) < 1e-4

    def test_rate_conversion_invalid_periods(self, client):
        response = client.post(
            "/api/calculate/rate-conversion",
            json={
                "nominal_rate_pct": 6,
                "source_periods_per_year": 0,
                "target_periods_per_year": 1,
            },
        )
        assert response.status_code == 400

    def test_compounding_periods(self, client):
        response = client.get("/api/calculate/compounding-periods")
        assert response.status_code == 200
        assert response.json()["monthly"] == 12

    def test_cpi_inflation(self, client):
        response = client.post(
            "/api/calculate/inflation/cpi",
            json={
                "amount": 100,
                "from_year": 2020,
                "from_month": 1,
                "to_year": 2023,
                "to_month": 1,
            },
        )
        assert response.status_code == 200
        assert abs(response.json()["result"] - 115.97) < 0.02

    def test_cpi_year_not_available(self, client):
        """Test a year outside the CPI table is reported as not found."""
        response = client.post(
            "/api/calculate/inflation/cpi",
            json={
                "amount": 100,
                "from_year": 1900,
                "from_month": 1,
                "to_year": 2023,
                "to_month": 1,
            },
        )
        assert response.status_code == 404

    def test_flat_rate_backward(self, client):
        response = client.post(
            "/api/calculate/inflation/flat-rate?backward=true",
            json={"amount": 100, "rate_pct": 3, "years": 10},
        )
        assert response.status_code == 200
        assert response.json()["result"] == 74.41

    def test_flat_rate_overflow(self, client):
        """Test growth past float range is a 400, not a server error."""
        response = client.post(
            "/api/calculate/inflation/flat-rate",
            json={"amount": 100, "rate_pct": 10, "years": 10000},
        )
        assert response.status_code == 400

    def test_inflation_rates(self, client):
        response = client.get("/api/calculate/inflation/rates")
        assert response.status_code == 200
        assert "2022" in response.json()


class TestTaxAPI:
    """Test income tax endpoints."""

    def test_income_tax(self, client):
        response = client.post(
            "/api/tax/income",
            json={"gross_income": 60000, "filing_status": "single", "year": 2024},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["taxable_income"] == 45400
        assert data["total_tax"] == 5216
        assert data["marginal_rate"] == 0.12

    def test_unsupported_year(self, client):
        response = client.post(
            "/api/tax/income",
            json={"gross_income": 60000, "filing_status": "single", "year": 2030},
        )
        assert response.status_code == 404

    def test_unknown_filing_status(self, client):
        response = client.post(
            "/api/tax/income",
            json={"gross_income": 60000, "filing_status": "widowed", "year": 2024},
        )
        assert response.status_code == 422

    def test_tax_return(self, client):
        response = client.post(
            "/api/tax/return",
            json={
                "filing_status": "single",
                "year": 2024,
                "wages": 60000,
                "young_dependents": 1,
                "federal_withheld": 4000,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["federal_tax"] == 3216
        assert data["refund_or_owed"] == 784

    def test_tax_years(self, client):
        response = client.get("/api/tax/years")
        assert response.status_code == 200
        assert response.json() == [2024, 2025]


class TestNetworkAPI:
    """Test subnet endpoints."""

    def test_ipv4(self, client):
        response = client.post(
            "/api/network/ipv4", json={"ip_address": "192.168.1.1", "subnet": 24}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["network"] == "192.168.1.0"
        assert data["broadcast"] == "192.168.1.255"
        assert data["usable_host_count"] == 254
        assert data["usable_range"] == ["192.168.1.1", "192.168.1.254"]

    def test_ipv4_dotted_mask(self, client):
        response = client.post(
            "/api/network/ipv4",
            json={"ip_address": "10.20.30.40", "subnet": "255.255.240.0"},
        )
        assert response.status_code == 200
        assert response.json()["prefix_length"] == 20

    def test_ipv4_invalid(self, client):
        response = client.post(
            "/api/network/ipv4", json={"ip_address": "300.1.1.1", "subnet": 24}
        )
        assert response.status_code == 400

    def test_ipv6(self, client):
        response = client.post(
            "/api/network/ipv6",
            json={"ip_address": "2001:db8:85a3::8a2e:370:7334", "prefix": 64},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["network"] == "2001:db8:85a3::"
        assert data["address_count"] == "18446744073709551616"


class TestStatisticsAPI:
    """Test descriptive statistics endpoint."""

    def test_describe_text(self, client):
        response = client.post(
            "/api/statistics/describe", json={"text": "10, 12, 23, 23, 16, 23, 21, 16"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 8
        assert data["mean"] == 18
        assert abs(data["std_dev"] - 5.237) < 1e-3

    def test_describe_population(self, client):
        response = client.post(
            "/api/statistics/describe",
            json={"values": [2, 4, 4, 4, 5, 5, 7, 9], "mode": "population"},
        )
        assert response.status_code == 200
        assert response.json()["std_dev"] == pytest.approx(2.0)

    def test_sample_needs_two_values(self, client):
        response = client.post("/api/statistics/describe", json={"values": [5]})
        assert response.status_code == 400

    def test_missing_input(self, client):
        response = client.post("/api/statistics/describe", json={})
        assert response.status_code == 400

    def test_unparseable_text(self, client):
        response = client.post("/api/statistics/describe", json={"text": "1, two, 3"})
        assert response.status_code == 400


class TestDatesAPI:
    """Test date and age endpoints."""

    def test_age(self, client):
        response = client.post(
            "/api/dates/age", json={"dob": "2000-01-01", "as_of": "2024-03-15"}
        )
        assert response.status_code == 200
        data = response.json()
        assert (data["years"], data["months"], data["days"]) == (24, 2, 14)
        assert data["total_days"] == 8840

    def test_age_future_birth(self, client):
        response = client.post(
            "/api/dates/age", json={"dob": "2030-01-01", "as_of": "2024-03-15"}
        )
        assert response.status_code == 400

    def test_difference(self, client):
        response = client.post(
            "/api/dates/difference",
            json={"start_date": "2024-01-31", "end_date": "2025-03-01"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["years"] == 1
        assert data["months"] == 1
        assert data["total_days"] == 395

    def test_shift_add_clamps_month_end(self, client):
        response = client.post(
            "/api/dates/shift", json={"start_date": "2024-01-31", "months": 1}
        )
        assert response.status_code == 200
        assert response.json()["result_date"] == "2024-02-29"

    def test_shift_subtract(self, client):
        response = client.post(
            "/api/dates/shift",
            json={"start_date": "2024-03-15", "operation": "subtract", "weeks": 2},
        )
        assert response.status_code == 200
        assert response.json()["result_date"] == "2024-03-01"

    def test_shift_out_of_range(self, client):
        response = client.post(
            "/api/dates/shift", json={"start_date": "9999-12-01", "years": 1}
        )
        assert response.status_code == 400


class TestExpressionAPI:
    """Test expression evaluation endpoint."""

    def test_evaluate(self, client):
        response = client.post(
            "/api/expressions/evaluate", json={"expression": "2 * (3 + 4)^2"}
        )
        assert response.status_code == 200
        assert response.json()["result"] == 98

    def test_evaluate_degrees(self, client):
        response = client.post(
            "/api/expressions/evaluate",
            json={"expression": "sin(30)", "angle_mode": "degrees"},
        )
        assert response.status_code == 200
        assert response.json()["result"] == pytest.approx(0.5)

    def test_evaluate_rejects_code(self, client):
        response = client.post(
            "/api/expressions/evaluate", json={"expression": "__import__('os')"}
        )
        assert response.status_code == 400

    def test_evaluate_rejects_deep_nesting(self, client):
        response = client.post(
            "/api/expressions/evaluate",
            json={"expression": "(" * 300 + "1" + ")" * 300},
        )
        assert response.status_code == 400
