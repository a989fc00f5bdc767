"""Example: Reading lines of an AWS S3 object."""

from rangeio import ReadModifiedError, open_reader

# Read from S3 using URI (auto-detection)
reader = open_reader("s3://my-bucket/path/to/data.csv", line_buffer_size=1024 * 1024)

# Or use explicit S3Source for more control
# from rangeio import RangeReader
# from rangeio.sources import S3Source
# import boto3
# s3_client = boto3.client("s3", region_name="us-east-1")
# source = S3Source(bucket="my-bucket", key="path/to/data.csv", client=s3_client)
# reader = RangeReader(source)

print("Object metadata:", reader.get_metadata())

try:
    header = reader.gets()
    print("Header:", header)

    count = sum(1 for _ in reader.lines())
    print(f"Data lines: {count}")
except ReadModifiedError as e:
    print(f"Object was overwritten while reading: {e}")
