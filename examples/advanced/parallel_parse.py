"""Thread safe — parse 1000 messages in parallel with one shared catalog."""

from concurrent.futures import ThreadPoolExecutor

from spanmark import parse

messages = [f"***Message {i}*** from @user{i} about #topic{i % 7}" for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(parse, messages))

print(f"Parsed {len(results)} messages in parallel")
print("First message spans:", len(results[0]))
print("Last message spans:", len(results[-1]))
