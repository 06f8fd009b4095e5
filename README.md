# jswitch

`jsh` is a command-line tool for managing several JDK installations on one
machine. It finds the JDKs already installed and records them in a small
JSON configuration file. It switches `JAVA_HOME` between them. It can also
download and install Eclipse Temurin builds from the Adoptium API.

## Installation

```
pip install .
```

This installs the `jsh` command.

## Usage

List the JDKs found on this machine. The JDK that `JAVA_HOME` points to is
marked with `*`:

```
jsh list
```

Before printing, `list` scans for JDKs and registers any whose major version
is not yet known. If `JAVA_HOME` points at a registered JDK, `list` also
makes that JDK the current one in the configuration. It skips this step when
the configuration file was written in the last ten seconds.

Show the active JDK. `JAVA_HOME` is checked first. If it is unset, the saved
configuration is used:

```
jsh current
```

`current` reports an error when `JAVA_HOME` is set to a JDK that is not
registered. It also reports an error when neither `JAVA_HOME` nor the
configuration names a JDK.

Switch to a registered JDK by its major version:

```
jsh use 17
```

The effect of `use` depends on the platform:

- **Linux and macOS:** it writes `JAVA_HOME` and `PATH` lines marked
  `# jsh managed` into `~/.zshrc` if `$SHELL` contains `zsh`, and into
  `~/.bashrc` otherwise. Lines already marked this way are replaced, not
  duplicated. Load the file afterwards with `source ~/.zshrc` or
  `source ~/.bashrc`.
- **Windows:** it sets `JAVA_HOME` and `Path` in the system environment in
  the registry, which needs administrator rights. It removes earlier JDK and
  JRE `bin` entries from `Path` and puts the new one first. Restart your
  terminal after switching.

Look up the Temurin releases available for your platform:

```
jsh search
jsh search 21
```

With a keyword, `search` keeps the packages that meet either condition:

- the keyword appears in the package's version or vendor (case is ignored);
- the keyword equals the package's major version.

Results are grouped by major version, newest first, and LTS releases are
tagged.

Download, unpack and register a release:

```
jsh download 21
jsh download 17 --vendor temurin
```

The version must be a whole major version number. Only `temurin` (or
`adoptium`) is a known vendor. Any other vendor prints a warning and Temurin
is used instead. Archives are `.zip` on Windows and `.tar.gz` elsewhere.
After unpacking, the downloaded archive is deleted.

`jsh --version` prints the version. If a command fails, `jsh` prints
`Error:` and the reason to standard error, and exits with status 1.

## Where files are kept

`jsh` keeps the following files in one directory:

- `config.json`
- `downloads/`, for archives
- `jdks/`, for unpacked JDKs

That directory is the one holding the running `jsh` program. Set
`JSWITCH_HOME` to use a different directory.

## Where JDKs are looked for

- Windows: drives `C:\` to `G:\`
- macOS: `/Library/Java/JavaVirtualMachines`, `/System/Library/Java/JavaVirtualMachines`
- Linux: `/usr/lib/jvm`, `/usr/java`, `/opt/java`
- whatever `JAVA_HOME` currently points to

Directories are searched up to five levels deep. A directory counts as a JDK
when it has a `bin/java` (or `bin\java.exe`) executable and a `lib`
directory. Its version and vendor are read from the output of
`java -version`. For example, `1.8.0_291` is registered as `8` and `17.0.2`
as `17`. JDKs are registered under their major version, and the first one
found for a version is kept.

## Using it from Python

The pieces behind the commands can be used on their own:

- `jswitch.manager.JdkManager`: `load`, `scan_jdks`, `list_jdks`,
  `switch_jdk`, `current`
- `jswitch.detector`: `detect_all`, `is_valid_jdk`, `parse_version_output`
- `jswitch.sources.AdoptiumSource`: `fetch_versions`, `find_package`
- `jswitch.downloader.Downloader`
- `jswitch.extractor.extract`
- `jswitch.envupdate`: `rewrite_rc_lines`, `merge_windows_path`

Every error these raise derives from `jswitch.errors.JdkError`.

## What it does not do

- It does not verify the checksum of downloaded archives. The checksum is
  read from the catalogue but never checked.
- On Windows it does not notify running programs of the environment change.
  It prints a warning instead, and new terminals pick up the change.
- It does not uninstall JDKs or remove them from the configuration.

## Colour

Output is coloured when the terminal appears to support it. Set `NO_COLOR`
to turn colour off.

## Development

```
pip install -e ".[test]"
pytest
```