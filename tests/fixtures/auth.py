"""Credentials shared by the test settings and the API tests."""

TEST_API_TOKEN = "test-api-token"
