# orlafs

A small file system tool. Each call runs one operation and prints the result
as an indented JSON object with sorted keys. Every result has a `success`
field. A failed operation also has an `error` field that holds a message.

## Installation

```
pip install .
```

## Command line

You can give the operation as a subcommand or with `--operation`:

```
orlafs read --path ~/notes.txt
orlafs --operation read --path ~/notes.txt
```

You can put the options before or after the subcommand. If you give no
operation, the command prints its help and exits with status 0. You can also
run the command as `python -m orlafs.cli`.

These operations are available:

| Operation | Options | Result fields |
|-----------|---------|---------------|
| `read`    | `--path` | `content` (the file must be valid UTF-8) |
| `write`   | `--path`, `--content`, `--create-dirs` | `path` |
| `list`    | `--path`, `--recursive` | `items`, `count` |
| `exists`  | `--path` | `exists`, `path`, and `type`, `is_file`, `is_dir` when the path exists |
| `stat`    | `--path` | `path`, `name`, `type`, `size`, `mode`, `modified`, `accessed`, `created`, `is_file`, `is_dir`, `is_symlink` |
| `mkdir`   | `--path`, `--parents` | `path`, plus `message` when the directory already exists |
| `rm`      | `--path`, `--recursive` | `path` |
| `mv`      | `--source`, `--dest` | `source`, `dest` |
| `cp`      | `--source`, `--dest`, `--recursive` | `source`, `dest` |

The switches `--recursive`, `--parents` and `--create-dirs` take one of these
boolean values: `true`, `True`, `TRUE`, `t`, `T`, `1`, `false`, `False`,
`FALSE`, `f`, `F` or `0`. Their default is `false`. Any other value is an
error.

The command exits with status 1 in these cases:

- the operation fails;
- the operation is unknown;
- a boolean value cannot be parsed;
- the arguments cannot be parsed.

In each of these cases it prints a JSON error object. The one exception is
`exists`, which always exits with status 0.

Paths may contain `~` and environment variables such as `$HOME` or
`${HOME}`. Paths are normalised before they are used.

Examples:

```
orlafs write --path /tmp/demo/hello.txt --content "Hello" --create-dirs true
orlafs list --path /tmp/demo --recursive true
orlafs cp --source /tmp/demo --dest /tmp/demo-copy --recursive true
orlafs rm --path /tmp/demo-copy --recursive true
```

Listings are sorted by name. A recursive listing goes depth first and does
not follow symbolic links. It adds a `relative` field to each item, which
gives the item's path relative to the listed directory.

## Library

The module `orlafs.operations` has the same operations as functions:

- `read`
- `write`
- `list_dir`
- `exists`
- `stat`
- `mkdir`
- `rm`
- `mv`
- `cp`

When an operation succeeds, its function returns a plain dictionary of result
fields without the `success` field. When an operation fails, the function
raises `FsToolError`.

```python
from orlafs.operations import FsToolError, read, write, list_dir

write("/tmp/demo/hello.txt", "Hello", True)
print(read("/tmp/demo/hello.txt")["content"])

try:
    list_dir("/tmp/missing", False)
except FsToolError as exc:
    print(exc)
```

`expand_path` applies the same `~` and variable expansion and normalisation
that every operation applies to its paths.

The module `orlafs.cli` provides these functions:

- `run_operation(operation, options)` runs an operation by name. `options`
  maps flag names such as `"path"` or `"create-dirs"` to their string values.
  The function returns the result with `success` added. A failed operation
  gives `{"error": ..., "success": False}`. An unknown operation or a bad
  boolean value raises `ValueError`.
- `parse_bool` parses a boolean value.
- `build_parser` builds the argument parser.
- `main` runs the whole command.