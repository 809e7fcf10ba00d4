pytest_plugins = [
    "tests.fixtures.mocked_aws",
    "tests.fixtures.catalog_client",
]
