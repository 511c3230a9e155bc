# fenris_client

The client side of a small remote file server, as a library. It reads what a
user types at a prompt, turns it into typed requests, and turns the server's
replies into lines of text ready to show on a terminal. It has no
dependencies beyond the standard library.

## Modules

### `fenris_client.interface`

`TUI` is the terminal front end. It reads from and writes to a pair of text
streams (standard input and output unless others are passed to the
constructor).

- `get_server_ip()` asks for the server address. `localhost` and empty input
  give `127.0.0.1`; anything that is neither a dotted IPv4 address nor a
  hostname is also replaced by `127.0.0.1`, with a message.
- `get_port_number()` asks for the port; anything that is not a number from
  1 to 65535 gives `7777`.
- `get_command()` shows the `fenris:<dir>> ` prompt, splits the line into
  words and returns them. An empty line, an invalid command or `help` (after
  printing the help) gives an empty list.
- `validate_command(parts)` checks the command name and its argument count
  and prints a message when they are wrong.
- `display_result(success, result)`, `display_help()`,
  `update_current_directory(new_dir)` and `get_current_directory()` print
  results, list the commands, and keep the directory shown in the prompt
  (always starting with `/`, without a trailing `/` except for the root).

### `fenris_client.request_manager`

`RequestManager.generate_request(args)` builds a `Request` (a dataclass with
`command`, a `RequestType`; `filename`; and `data`, bytes) from the words of
a command. An unknown command or missing arguments raise
`InvalidRequestError`, a subclass of `ValueError`.

For `write`, `append` and `create` the remaining words are joined with
spaces to form the content, or, after `-f <path>`, the content is read from
that local file. `upload <local_file> <remote_name>` reads the local file
into a `WRITE_FILE` request. `ls` without an argument lists `.`.

### `fenris_client.response_manager`

`ResponseManager.handle_response(response)` turns a `Response` (with its
`ResponseType`, and an optional `FileInfo` or `DirectoryListing`) into a list
of lines. The first line is always `"Success"` or `"Error"`; the rest are
what the user sees: file contents split into lines (or a note for empty or
binary data), a table for directory listings, file details, or messages.

The helpers can be used on their own:

- `format_file_size(size_bytes)` — `"512 B"`, `"1.50 KB"`, up to `TB`.
- `format_timestamp(timestamp)` — local time as `YYYY-mm-dd HH:MM:SS`, or
  `"Invalid timestamp"`.
- `format_permissions(permissions)` — `"rw-r--r-- (644)"` for `0o644`.

### `fenris_client.client`

`Client` ties the pieces together. `run()` keeps the connection up (asking
the user for an address when none is known, and waiting `retry_delay`
seconds between failed attempts), reads commands, sends requests, shows the
formatted replies, and updates the prompt's directory after a successful
`cd`. `process_command(parts)` handles a single command and returns `False`
once the user asks to `exit`; `connect_to_server()` makes one connection
attempt. A `Client` is also a context manager that disconnects on exit.

The client works with any object that matches the `ConnectionManager`
protocol in this module (`connect`, `send_request`, `receive_response` and
friends, raising `ConnectionError` or `OSError` on failure), and any user
interface matching `UserInterface`; `TUI` is used when none is given.

## Commands understood at the prompt

| Command                             | Meaning                                  |
|-------------------------------------|------------------------------------------|
| `cd <directory>`                    | change the current directory             |
| `ls [directory]`                    | list a directory (default: current)      |
| `cat <file>`                        | show a file's contents                   |
| `upload <local_file> <remote_name>` | send a local file to the server          |
| `write <file> <content>`            | create or overwrite a file               |
| `append <file> <content>`           | append to a file                         |
| `rm <file>`                         | remove a file                            |
| `info <file>`                       | show size, time, type and permissions    |
| `mkdir <directory>`                 | create a directory                       |
| `rmdir <directory>`                 | remove a directory                       |
| `ping`                              | check that the server answers            |
| `help`                              | list the commands                        |
| `exit`                              | leave the client                         |

## Example

```python
from fenris_client.request_manager import InvalidRequestError, RequestManager

manager = RequestManager()
request = manager.generate_request(["write", "/notes.txt", "hello", "world"])
# request.command is RequestType.WRITE_FILE
# request.filename == "/notes.txt", request.data == b"hello world"

try:
    manager.generate_request(["frobnicate"])
except InvalidRequestError as exc:
    print(exc)  # unknown command 'frobnicate'
```

## What this package does not do

- It has no network layer: there is no class that opens a socket, exchanges
  keys, encrypts or serialises requests. You supply the object that fulfils
  the `ConnectionManager` protocol.
- It has no server and no storage of its own.
- It installs no command-line program; start the client from your own code
  by building a `Client` and calling `run()`.