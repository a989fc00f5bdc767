"""Example: Reading a local file as if it were a remote object."""

from rangeio import open_reader

reader = open_reader("examples/data.csv", line_buffer_size=64)

print("File metadata:", reader.get_metadata())
print("\nLines:")
for i, line in enumerate(reader.lines(), 1):
    print(f"Line {i}: {line!r}")

# Rewind and read the first 32 bytes again
reader.rewind()
print("\nFirst 32 bytes:", reader.read(32))
print("At end of file:", reader.eof())
