# octagon

A command-line helper and small library for running weekly double-elimination
Smash Ultimate tournaments. It lays out double-elimination brackets by seed
number and keeps a list of player conflicts. It can reshuffle a seeding so that
conflicting players meet later, while moving seeds as little as possible. It
also keeps a local cache of player names and ratings. Per-player rating biases
and ID aliases are stored as JSON files.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Configuration

Settings live in `~/.config/octagon/`. You can choose a different directory
with `--config-dir`.

At start-up the command loads environment variables from `octagonrc` in that
directory. If that file is missing, it loads `.env` from the current directory
instead. If neither file exists, the command stops with an error. The same
directory holds:

- `conflicts.json`: saved conflicts between players. Expired entries are dropped
  whenever the file is read through the command.
- `bias.json`: rating multipliers for individual players.
- `aliases.json`: a JSON object mapping alternate player IDs to real IDs.

The player cache is an SQLite file. By default it is `octagon-cache` in the
system temporary directory; `--cache-path` changes it. Each entry expires 24
hours after it was written.

Set the `DEBUG` environment variable to get debug logging.

## Usage

```
octagon --help
octagon --version
```

Subcommands (aliases in brackets):

- `octagon bracket print` (`b p`): draws the winners side of an 8-player bracket
  as text.
- `octagon cache list` (`l`, `ls`): lists every cached player with their ID.
- `octagon cache clear` (`c`): empties the cache.
- `octagon conflicts list` (`c l`, `conflict l`): lists active conflicts with
  players, priority, expiry and reason.
- `octagon conflicts create PLAYER1 PLAYER2 [-p PRIORITY] [-r REASON] [-e EXPIRES]`
  (`create` aliases: `c`, `add`, `a`):
  - Priority must be 1 to 3 and defaults to 3.
  - Each name is looked up in the cache, exact tag first. Failing that, the
    closest tag within an edit distance of half the name's length is used, with
    a minimum distance of 2.
  - The conflict is saved only if you answer `y` or `Y` to the confirmation.
- `octagon rating bias add PLAYER RATIO REASON... [-e EXPIRES]`: adds a rating
  multiplier. `PLAYER` may be a cached gamer tag or a numeric player ID. The
  ratio must be positive.
- `octagon rating bias list`: lists all stored biases.

Expiry durations are written like `90m`, `1h30m` or `24h`. Days (`7d`) and
weeks (`2w`) are also accepted.

## Library use

```python
import random

from octagon.brackets import create_bracket
from octagon.models import Conflict, ConflictPlayer, Player
from octagon.resolver import resolve_conflicts

players = [Player(name=f"player{i}", id=i, rating=100.0 - i) for i in range(1, 17)]
conflicts = [
    Conflict(
        priority=3,
        reason="same household",
        players=[ConflictPlayer("player1", 1), ConflictPlayer("player16", 16)],
    )
]

bracket = create_bracket(len(players))
seeded = resolve_conflicts(bracket, conflicts, players, random.Random(0))
```

`resolve_conflicts` runs a Monte Carlo search over random swaps of neighbouring
seeds; seeds 1 and 2 never move. Each candidate seeding gets a score. For every
conflict hit by a set in the bracket, the score adds 2 plus that conflict's
priority. It also adds a penalty for how far seeds moved, and moves of top
seeds weigh more. Other useful pieces:

- `octagon.checker.check_conflict` and `list_unresolved_conflicts`: count and
  list the conflicts in a seeding.
- `octagon.printer.format_seeds` and `format_conflicts`: produce text tables.
- `octagon.characters.get_character_id`: matches a character name or nickname to
  its start.gg id by closest name.
- `octagon.cache.Cache`: the key-value cache. It stores players with
  `store_player` and ratings with `set_rating` / `get_rating`.
- `octagon.config.ConfigStore`: reads aliases and biases. `apply_bias` scales a
  rating by the player's bias.
- `octagon.conflict_store.ConflictStore`: reads and writes conflict files.

## What it does not do

This package has no connection to start.gg or to any online rating database.
It cannot perform these tasks:

- fetch attendees, sets or seeds;
- publish a seeding;
- report set results;
- look up a player's rating remotely.

It also has no command that fills the player cache. Players must be added with
`Cache.store_player` before `conflicts create` or name lookups in `rating bias
add` can find them. There is no web server or interactive screen.