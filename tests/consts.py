TEST_BUCKET_NAME = "test-catalog-images"
TEST_REGION = "us-east-1"
