"""Human agent - reads actions from terminal."""

from unoengine.engine import Action, ChooseColor, DeclareSafety, DrawCard, PassTurn, PlayCard


def describe_action(action: Action, hand) -> str:
    if isinstance(action, PlayCard):
        return f"PLAY {hand[action.hand_index]}"
    if isinstance(action, ChooseColor):
        return f"COLOR {action.color.value}"
    if isinstance(action, DrawCard):
        return "DRAW"
    if isinstance(action, PassTurn):
        return "PASS"
    if isinstance(action, DeclareSafety):
        return "DECLARE SAFETY"
    return repr(action)


class HumanAgent:
    """Agent that prompts the human for input via terminal."""

    def __init__(self, name: str = "human"):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def get_action(
        self,
        player_view,
        legal_actions: list[Action],
        player_index: int,
    ) -> Action | None:
        if not legal_actions:
            return None

        print("\n--- Your turn ---")
        print("Your hand:", " ".join(str(c) for c in player_view.my_hand))
        print("Top discard:", player_view.top_discard)
        print("Color to match:", player_view.current_color.value)
        if player_view.pending_draws:
            print("Pending draws:", player_view.pending_draws)
        print("\nLegal actions:")
        for i, a in enumerate(legal_actions):
            print(f"  {i}: {describe_action(a, player_view.my_hand)}")

        while True:
            try:
                raw = input("Enter number: ").strip()
                idx = int(raw)
                if 0 <= idx < len(legal_actions):
                    return legal_actions[idx]
            except ValueError:
                pass
            except EOFError:
                return None
            print("Invalid. Try again.")

    def wants_to_declare_safety(self, player_view) -> bool:
        try:
            raw = input("One card left! Declare safety? [Y/n] ").strip().lower()
        except EOFError:
            return False
        return raw in ("", "y", "yes")
