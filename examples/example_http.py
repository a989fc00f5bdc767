"""Example: Reading byte windows of an HTTP/HTTPS resource."""

from rangeio import open_reader

# Read from HTTP URL (auto-detection)
reader = open_reader("https://example.com/path/to/data.csv", read_ahead=64 * 1024)

# Or use explicit HTTPSource for authentication
# from rangeio import RangeReader
# from rangeio.sources import HTTPSource
# source = HTTPSource(
#     url="https://example.com/path/to/data.csv",
#     headers={"Authorization": "Bearer token123"},
#     timeout=60,
# )
# reader = RangeReader(source, read_ahead=64 * 1024)

print("Source metadata:", reader.get_metadata())

header = reader.gets()
print("Header:", header)

# Small reads are served from the read-ahead buffer
reader.pos = 1000
print("Bytes 1000-1015:", reader.read(16))
print("Bytes 1016-1031:", reader.read(16))
