"""Testing utilities for code built on the client.

Load the fixtures with ``pytest_plugins = ["generic_api_client.testing"]`` in
a ``conftest.py``. pytest must be installed, for example through the
``test`` extra: ``pip install generic-api-client[test]``.

Example:
    ```python
    def test_fetches_products(fake_client):
        fake_client.stub_response("https://dummyjson.com/products", {"products": []})

        fetch_products(fake_client)

        fake_client.assert_sent(lambda request: request.url.path == "/products")
    ```
"""

from generic_api_client.testing.fixtures import fake_client, pytest_failure_reporter

__all__ = ["fake_client", "pytest_failure_reporter"]
