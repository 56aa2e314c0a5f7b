# chatcore

Core pieces of a command-line chat client:

- `chatcore.cli`: command-line states (`State`, `WelcomePageState`) and a
  `StateContext` that holds the current one, starting on the welcome page;
- `chatcore.starter`: `ApplicationStarter`, which runs init, run and
  shutdown callbacks around a loop;
- `chatcore.logging_manager`: `LoggerManager`, which gives each named logger
  its own rotating log file and also pushes every record over a ZeroMQ PUSH
  socket through a `ZmqHandler`;
- `chatcore.log_viewer`: `view_logs`, which binds a ZeroMQ PULL socket and
  prints the records it receives.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Commands

```
chatcore
```

Sets up a `StateContext` on the welcome page and exits with status 0. It
takes no options besides `--help`.

```
chatcore-log-viewer [--endpoint ENDPOINT]
```

Binds a ZeroMQ PULL socket on `ENDPOINT` (default `tcp://127.0.0.1:45875`,
the same endpoint `LoggerManager` pushes to by default), prints
`Log viewer started. Waiting for messages...`, then prints each message as
it arrives. On SIGINT or SIGTERM it prints `End.` and exits. A ZeroMQ error,
such as the endpoint already being bound, is reported on standard error as
`Error: ...`.

## Using the library

### Logging

```python
import logging
from chatcore.logging_manager import LoggerManager

manager = LoggerManager.instance()          # process-wide manager
manager.initialize("logs", logging.INFO)    # creates the "default" logger

log = manager.create_logger("network", logging.DEBUG)
log.info("connected")

manager.set_level("network", logging.WARNING)
manager.get_logger("network")   # unknown names log a warning and return "default"

manager.shutdown()
```

- Each logger writes to `<logs_dir>/<name>.log`, rotating at `max_file_size`
  bytes (default 10 MiB) and keeping `max_files` old files (default 5). The
  directory is created if needed.
- Lines look like `[2024-01-01 12:00:00.123] [network] [info] connected`.
- `create_logger` returns the existing logger if the name is already known.
  If the log file cannot be opened, the error is logged on the default
  logger and the default logger is returned; without a default logger the
  `OSError` is raised.
- `get_logger` raises `LookupError` when the manager has not been
  initialised and the name is unknown.
- Every logger also has a `ZmqHandler` sending each formatted record to the
  manager's `endpoint` without blocking; records nobody can take are
  dropped.
- `shutdown()` closes all handlers, forgets all loggers and terminates the
  ZeroMQ context.

A `LoggerManager(endpoint)` can be created directly to push to another
endpoint.

### Application lifecycle

```python
from chatcore.logging_manager import LoggerManager
from chatcore.starter import ApplicationStarter

app = ApplicationStarter(
    LoggerManager.instance(),
    init_callback=lambda: print("ready"),
    run_callback=lambda: app.stop(),
    shutdown_callback=lambda: print("bye"),
)
app.install_signal_handlers()
app.start()
```

`start()` initialises the logger manager with its defaults, runs the init
callback, sets `running` and then calls the run callback repeatedly while
`running` is true. An exception raised once logging is up is logged as
critical and the logger manager is shut down; an exception before that is
raised to the caller.

`stop()` clears `running`, runs the shutdown callback and shuts down the
logger manager. After `install_signal_handlers()`, SIGINT and SIGTERM call
`stop()`.

### CLI states

```python
from chatcore.cli import StateContext, WelcomePageState

context = StateContext()            # starts on WelcomePageState
context.state.help()                # prints the welcome page commands
context.transition(WelcomePageState())
```

`WelcomePageState.help()` writes its command list to the stream given as
`out` (standard output by default); `exit()` raises `SystemExit(0)`.
New screens subclass `State` and implement `help()` and `exit()`.

## What this package does not do

- The `chatcore` command does not read or run commands; it only sets up the
  starting state and exits.
- The welcome page lists `sign_up` and `start_session`, but no state
  implements them. There are no account or chat screens.
- There is no chat networking, no server, no accounts and no message
  storage; the only network traffic is log records sent to and received by
  the log viewer.