# gridsnake

A snake game on a 55 × 50 grid. The snake grows by eating food and has to get
past hard and soft obstacles. It can fire bullets that clear obstacles, and it
has two defensive skills: a shield and invincibility.

## Installing and starting

```
pip install .
gridsnake
```

The window is built with tkinter, which has to be available in your Python.
`gridsnake --score-file PATH` chooses the file that keeps the best score. The
default is `highestScore.txt` in the current directory.

The first window asks for a player name. The **进入游戏** button becomes active
once a name has been typed, and it opens the game window. In that window, press
the start button (or `R`) to begin a round. The back button closes the board and
brings back the first window.

## Controls

| Key     | Action                                          |
|---------|-------------------------------------------------|
| `W`     | turn up                                         |
| `S`     | turn down                                       |
| `A`     | turn left                                       |
| `D`     | turn right                                      |
| `Space` | fire a bullet, if the gun is not cooling down   |
| `I`     | become invincible for 5 seconds                 |
| `P`     | raise a shield                                  |
| `T`     | pause / resume                                  |
| `R`     | start a new round once the game is over         |

Turns are queued and carried out at most one per tick, in order.
The first key pressed after a tick replaces whatever was still queued.
Turns along the snake's current axis, whether the same direction or a reversal,
are dropped.

## Rules

- The game advances one tick every 200 ms.
- The score is the snake's length. A round starts with a length of 4, with the
  head at (8, 8), heading right.
- Each round places 25 hard and 25 soft obstacle shapes at random. The shapes
  are T, L, cross, rectangle and Z, and each is rotated at random. No obstacle
  is placed closer than 10 cells (Manhattan distance) to the snake's head.
- Food appears every 2 to 14 ticks and disappears after 50 ticks. Red food makes
  the snake grow. Gold food, drawn in blue, also makes the snake invincible for
  ten seconds. About 30% of the food is gold.
- Grey **hard** obstacles and the grid edge end the game. An invincible snake
  passes through hard obstacles, but not through the edge.
- Yellow **soft** obstacles shorten the snake by one segment and are used up.
  A shield absorbs one of them instead. An invincible snake simply clears them.
  If a snake of length one hits a soft obstacle, the game is over.
- Running into its own body ends the game, unless the snake is invincible or
  carries a shield. In the shield case, the shield is spent.
- Bullets leave from the head in the snake's direction and move two cells per
  tick. A bullet destroys the first obstacle it meets and vanishes at the grid
  edge. After a shot, the gun has to cool down. The side panel shows whether it
  is ready.

The best score is written to the score file when a round beats it. It is read
back on the next start, and it is never shown as lower than 4.

## Using the engine directly

The game logic does not depend on any window.

```python
from gridsnake.game import Game

game = Game(55, 50, 4, (8, 8), "r")
game.reset(4, (8, 8), "r")
game.generate_food(50)
while game.step():
    pass
```

`Game` accepts a `random.Random` as `rng=` and a clock function as `clock=`,
so that runs can be repeated.

`gridsnake.session.Session` adds the rest of the play loop on top of `Game`:
the key handling, the turn queue, the food schedule and the high score. Call
`start()` to begin a round and `press(key)` to feed it keys. `tick()` advances
the round and returns a `TickOutcome`, or `None` when no round is running.
`bullet_status()` gives the text for the gun's state.

```python
from gridsnake.session import Session

session = Session("scores.txt")
session.start()
session.press("s")
outcome = session.tick()
print(outcome.alive, outcome.score, outcome.high_score)
```

`load_high_score(path)` and `save_high_score(path, score)` read and write the
score file on their own.

## What it does not do

The player name is only used to enable the button that opens the game window.
It is not stored, and it is not shown next to scores. Only a single best score
is kept: there is no table of players or past rounds.