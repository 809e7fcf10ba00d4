import io

from catalog_api.s3.write_objects import build_upload_key, public_object_url, upload_public_s3_object
from tests.consts import TEST_BUCKET_NAME


def test_build_upload_key():
    assert build_upload_key("widget.png", now_ms=1700000000000) == "uploads/1700000000000_widget.png"


def test_build_upload_key__uses_current_time():
    key = build_upload_key("widget.png")
    prefix, _, name = key.partition("_")
    assert prefix.startswith("uploads/") and prefix[len("uploads/"):].isdigit()
    assert name == "widget.png"


def test_public_object_url__aws():
    url = public_object_url("bucket", "uploads/1_a b.png", region="eu-west-1")
    assert url == "https://bucket.s3.eu-west-1.amazonaws.com/uploads/1_a%20b.png"


def test_public_object_url__custom_endpoint():
    url = public_object_url("bucket", "uploads/1_a.png", region="us-east-1", endpoint_url="http://localhost:4566/")
    assert url == "http://localhost:4566/bucket/uploads/1_a.png"


def test_upload_public_s3_object(mocked_aws):
    upload_public_s3_object(
        mocked_aws,
        bucket_name=TEST_BUCKET_NAME,
        object_key="uploads/1_test.txt",
        file_obj=io.BytesIO(b"hello"),
        content_type=None,
    )

    stored = mocked_aws.get_object(Bucket=TEST_BUCKET_NAME, Key="uploads/1_test.txt")
    assert stored["Body"].read() == b"hello"
    assert stored["ContentType"] == "application/octet-stream"
