import argparse
from dataclasses import dataclass
from typing import List, Optional, Tuple

import tqdm
import wandb

from solver import MinimaxSolver
from ttt_env import (
    CROSS,
    NOUGHT,
    TIE,
    UNRESOLVED,
    OptimalPolicy,
    Policy,
    RandomPolicy,
    evaluate,
    outcome_message,
    render,
    take_turn,
)
from ttt_state import encode_empty, whose_turn
from utils import make_rng, tally_outcomes

POLICY_NAMES = ("optimal", "random")
DEFAULT_CROSS_POLICY = "random"
DEFAULT_NOUGHT_POLICY = "random"
DEFAULT_GAMES = 1

OUTCOME_LABELS = {
    CROSS: "cross_wins",
    NOUGHT: "nought_wins",
    TIE: "draws",
}


@dataclass
class PlayConfig:
    cross: str = DEFAULT_CROSS_POLICY
    nought: str = DEFAULT_NOUGHT_POLICY
    games: int = DEFAULT_GAMES
    seed: Optional[int] = None
    show_boards: bool = False
    use_wandb: bool = False


class WandBLogger:
    def __init__(self, **init_kwargs):
        wandb.init(**init_kwargs)

    def log_dict(self, d, step):
        wandb.log(d, step=step)


def build_policy(name, solver, rng) -> Policy:
    if name == "optimal":
        return OptimalPolicy(solver)
    elif name == "random":
        return RandomPolicy(rng)
    raise ValueError(f"unknown policy {name!r}, expected one of {POLICY_NAMES}")


def play_game(
    cross_policy: Policy, nought_policy: Policy, state: Optional[int] = None
) -> Tuple[int, List[int]]:
    """Plays one game to the end and returns its outcome and every state seen."""
    if state is None:
        state = encode_empty()
    history = [state]
    outcome = evaluate(state)
    while outcome == UNRESOLVED:
        policy = cross_policy if whose_turn(state) == CROSS else nought_policy
        state = take_turn(state, policy(state))
        history.append(state)
        outcome = evaluate(state)
    return outcome, history


def play_games(
    cross_policy: Policy,
    nought_policy: Policy,
    games=DEFAULT_GAMES,
    logger=None,
    progress=True,
    on_game_end=None,
):
    outcomes = []
    for step in tqdm.tqdm(range(games), disable=not progress or games <= 1):
        outcome, history = play_game(cross_policy, nought_policy)
        outcomes.append(outcome)
        if on_game_end is not None:
            on_game_end(outcome, history)
        if logger:
            logger.log_dict(
                {
                    "outcome": OUTCOME_LABELS[outcome],
                    "plies": len(history) - 1,
                    **tally_outcomes(outcomes, OUTCOME_LABELS),
                },
                step,
            )
    return outcomes


def parse_args(argv=None) -> PlayConfig:
    parser = argparse.ArgumentParser(description="Play tic-tac-toe with minimax and random players")
    parser.add_argument("--cross", choices=POLICY_NAMES, default=DEFAULT_CROSS_POLICY, help="Policy for crosses")
    parser.add_argument("--nought", choices=POLICY_NAMES, default=DEFAULT_NOUGHT_POLICY, help="Policy for noughts")
    parser.add_argument("--games", type=int, default=DEFAULT_GAMES, help="Number of playthroughs")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random players")
    parser.add_argument("--show-boards", action="store_true", help="Print the board after every move")
    parser.add_argument("--wandb", action="store_true", help="Log outcomes to Weights & Biases")
    args = parser.parse_args(argv)
    if args.games < 1:
        parser.error("--games must be at least 1")
    return PlayConfig(
        cross=args.cross,
        nought=args.nought,
        games=args.games,
        seed=args.seed,
        show_boards=args.show_boards,
        use_wandb=args.wandb,
    )


def main(argv=None):
    config = parse_args(argv)

    solver = MinimaxSolver()
    solver.solve(encode_empty())

    rng = make_rng(config.seed)
    cross_policy = build_policy(config.cross, solver, rng)
    nought_policy = build_policy(config.nought, solver, rng)
    logger = WandBLogger(config=vars(config)) if config.use_wandb else None

    def report(outcome, history):
        if config.show_boards:
            for state in history:
                print(render(state))
        print(outcome_message(outcome))

    outcomes = play_games(
        cross_policy,
        nought_policy,
        games=config.games,
        logger=logger,
        on_game_end=report,
    )
    if config.games > 1:
        for label, count in tally_outcomes(outcomes, OUTCOME_LABELS).items():
            print(f"{label}: {count}")
    return outcomes


if __name__ == "__main__":
    main()
