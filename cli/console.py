"""Console UI for wordmatch application."""

import time

from core.config import ROUND_ADVANCE_DELAY
from cli.api_client import WordMatchAPIClient

COLUMN_WIDTH = 24

HELP_TEXT = (
    'Commands: "l N"/"r N" pick row N on the left/right, "h N" hint for row N, '
    '"x" hide hint, "s" swap columns, "n" new round, "reset", "status", "exit"'
)


def format_card(card: dict) -> str:
    """Render a single card with its selection markers."""
    if card['matched']:
        return f"  ({card['text']})"
    if card['wrong']:
        return f"! {card['text']}"
    if card['selected']:
        return f"> {card['text']}"
    return f"  {card['text']}"


def format_board(state: dict) -> list[str]:
    """Render both columns side by side, numbered from 1."""
    lines = []
    rows = max(len(state['left']), len(state['right']))
    for i in range(rows):
        left = format_card(state['left'][i]) if i < len(state['left']) else ''
        right = format_card(state['right'][i]) if i < len(state['right']) else ''
        lines.append(f"{i + 1:>2} {left:<{COLUMN_WIDTH}} {right}")
    return lines


def format_stats(state: dict) -> str:
    stats = state['stats']
    return (f"Time {state['session_time_display']} | "
            f"Accuracy {stats['accuracy']:.1f}% | "
            f"Streak {stats['current_streak']} (best {state['best_streak']}) | "
            f"Matched {len(state['matched_ids'])}/{state['pair_count']}")


def parse_command(text: str) -> tuple[str, int | None]:
    """Split user input into a command word and an optional row number."""
    parts = text.strip().split()
    if not parts:
        return ('', None)
    command = parts[0].lower()
    if len(parts) > 1 and parts[1].isdigit():
        return (command, int(parts[1]))
    return (command, None)


def card_at(state: dict, column: str, row: int | None) -> dict | None:
    """Card at a 1-based row of 'left' or 'right', or None."""
    cards = state[column]
    if row is None or row < 1 or row > len(cards):
        return None
    return cards[row - 1]


class ConsoleUI:
    """Console user interface for wordmatch application."""

    def __init__(self, client: WordMatchAPIClient):
        self.client = client
        self.last_event_seq = 0

    def print_state(self, state: dict):
        """Print the board, the visible hint and the stats line."""
        print('\n' + '=' * 60)
        if state['pair_count'] == 0:
            print('No words available. Check the word file on the server.')
        for line in format_board(state):
            print(line)
        if state['hint']:
            print(f"\n  Hint: {state['hint']}")
        print('-' * 60)
        print(format_stats(state))
        print('=' * 60)

    def print_status(self, state: dict):
        """Print detailed session status."""
        stats = state['stats']
        print('\n' + '=' * 50)
        print('SESSION SUMMARY')
        print('=' * 50)
        print(f"Session time: {state['session_time_display']}")
        print(f"Attempts: {stats['total_attempts']}")
        print(f"Correct on first try: {stats['correct_first_attempts']}")
        print(f"Accuracy: {stats['accuracy']:.1f}%")
        print(f"Current streak: {stats['current_streak']}")
        print(f"Best streak: {state['best_streak']}")
        print(f"Words seen this cycle: {len(state['used_ids'])}/{state['corpus_size']}")
        print('=' * 50 + '\n')

    def drain_events(self) -> bool:
        """Print feedback for new events. Returns True if a round was completed."""
        data = self.client.get_events(self.last_event_seq)
        self.last_event_seq = data['last_seq']
        completed = False
        for event in data['events']:
            if event['event'] == 'round_complete':
                completed = True
                print('\n*** Round complete! ***')
        return completed

    def handle(self, command: str, row: int | None, state: dict) -> dict | None:
        """Run one command. Returns the new state, or None for unknown input."""
        if command in ('l', 'r'):
            column = 'left' if command == 'l' else 'right'
            card = card_at(state, column, row)
            if card is None:
                print(f'No row {row} in the {column} column.')
                return state
            return self.client.select(column, card['id'])
        if command == 'h':
            column = 'left' if state['left_side'] == 'a' else 'right'
            card = card_at(state, column, row)
            if card is None:
                print(f'No row {row} in the {column} column.')
                return state
            return self.client.reveal_hint(card['id'])
        if command == 'x':
            return self.client.hide_hint()
        if command == 's':
            return self.client.toggle_swap()
        if command == 'n':
            return self.client.new_round()
        if command == 'reset':
            return self.client.reset_session()
        if command == 'status':
            self.print_status(state)
            return state
        return None

    def run(self):
        """Run the main application loop."""
        # Check server connection
        try:
            health = self.client.health_check()
            print(f"Connected to wordmatch server ({health['service']}, {health['words']} words)")
        except Exception as e:
            print(f"Error: Cannot connect to server at {self.client.base_url}: {e}")
            print("Make sure the server is running: python run_server.py")
            return

        print('\nMatch each word with its translation!')
        print(HELP_TEXT + '\n')
        state = self.client.get_state()
        self.last_event_seq = self.client.get_events()['last_seq']

        while True:
            self.print_state(state)
            command, row = parse_command(input('==> '))

            if command == 'exit':
                print('Goodbye!')
                return
            if command == '':
                continue

            try:
                new_state = self.handle(command, row, state)
                if new_state is None:
                    print(HELP_TEXT)
                    continue
                state = new_state
                if self.drain_events():
                    self.print_state(state)
                    time.sleep(ROUND_ADVANCE_DELAY + 0.1)
                    state = self.client.get_state()
            except Exception as e:
                print(f"Error talking to server: {e}")
