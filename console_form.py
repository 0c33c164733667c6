"""
Interactive console booking form.

Drives the real BookingForm against the configured booking API from the
terminal: pick a date, browse slots, choose a service and stylist, enter
contact details and submit.

Usage:
    python console_form.py
    python console_form.py --base-url http://localhost:5000/api
    python console_form.py --date 2025-03-18
"""

import argparse
import asyncio
import sys
from datetime import date
from typing import Optional

from booking_form.config import settings
from booking_form.form import BookingForm, FormState, InvalidTransitionError
from booking_form.tools.api_client import BookingApiClient

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

HELP_TEXT = """Commands:
  date YYYY-MM-DD      pick a date and load its slots
  stylist <id>         pick a stylist ('any' for no preference)
  time HH:MM           pick an available slot
  service <id>         pick a service
  name|phone|email|whatsapp <value>
  services | stylists  list the catalog
  slots                show slots for the selected date
  show                 show the current selection
  submit               book the appointment
  reset                clear the form / book another appointment
  quit"""


class ConsoleForm:
    """Renders a BookingForm in the terminal and feeds it typed commands."""

    MAX_INPUT_LENGTH = 500

    def __init__(self, form: BookingForm) -> None:
        self.form = form

    def say(self, text: str) -> None:
        print(f"{GREEN}{text}{RESET}")

    def warn(self, text: str) -> None:
        print(f"{RED}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    async def run(self, initial_date: Optional[date] = None) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  {settings.shop_name} - Book an Appointment{RESET}")
        print(f"{BOLD}  Dates {self.form.min_date} to {self.form.max_date}{RESET}")
        print(f"{BOLD}  Type 'help' for commands, 'quit' to exit{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        print()

        if initial_date is not None:
            await self.process_input(f"date {initial_date.isoformat()}")

        while True:
            user_input = input(f"\n{BLUE}[{self.form.state.value}] {RESET}").strip()
            if not user_input:
                continue
            if user_input.lower() in ("quit", "exit", "q"):
                print(f"\n{DIM}Session ended.{RESET}")
                return
            if len(user_input) > self.MAX_INPUT_LENGTH:
                self.warn("Input too long.")
                continue
            await self.process_input(user_input)

    async def process_input(self, text: str) -> None:
        command, _, arg = text.partition(" ")
        command = command.lower()
        arg = arg.strip()

        try:
            if command == "help":
                print(HELP_TEXT)
            elif command == "date":
                await self.form.select_date(date.fromisoformat(arg))
                self._print_slots()
            elif command == "stylist":
                await self.form.select_stylist("" if arg == "any" else arg)
                self.say(f"Stylist: {self.form.catalog.stylist_name(self.form.selection.stylist)}")
                if self.form.selection.date:
                    self._print_slots()
            elif command == "time":
                self.form.select_time(arg)
                self.say(f"Time: {arg}")
            elif command == "service":
                self.form.select_service(arg)
                self.say(f"Service: {self.form.catalog.service_name(arg)}")
            elif command in BookingForm.CUSTOMER_FIELDS:
                self.form.update_customer(command, arg)
                self.say(f"{command.capitalize()}: {arg}")
            elif command == "services":
                for s in self.form.catalog.services:
                    print(f"  {s.id:<16} {s.name} ({s.price}, {s.duration})")
            elif command == "stylists":
                for s in self.form.catalog.stylists:
                    print(f"  {s.id:<16} {s.name}")
            elif command == "slots":
                self._print_slots()
            elif command == "show":
                self._print_selection()
            elif command == "submit":
                await self._submit()
            elif command == "reset":
                self.form.reset()
                self.say("Form cleared.")
            else:
                self.warn(f"Unknown command '{command}'. Type 'help'.")
        except (ValueError, InvalidTransitionError) as e:
            self.warn(str(e))

        self.system_log(f"State: {self.form.state.value}")

    async def _submit(self) -> None:
        outcome = await self.form.submit()
        if outcome.success:
            print(f"{GREEN}{BOLD}{outcome.confirmation.summary()}{RESET}")
            self.say("Type 'reset' to book another appointment.")
        else:
            self.warn(outcome.error.message)

    def _print_slots(self) -> None:
        if not self.form.slots:
            self.say("Select a date first.")
            return
        cells = [
            f"{GREEN}{s.time}{RESET}" if s.available else f"{DIM}{s.time}{RESET}"
            for s in self.form.slots
        ]
        for i in range(0, len(cells), 6):
            print("  " + "  ".join(cells[i:i + 6]))

    def _print_selection(self) -> None:
        sel = self.form.selection
        catalog = self.form.catalog
        print(f"  Date:     {sel.date or '-'}")
        print(f"  Time:     {sel.time or '-'}")
        print(f"  Service:  {catalog.service_name(sel.service) if sel.service else '-'}")
        print(f"  Stylist:  {catalog.stylist_name(sel.stylist)}")
        print(f"  Name:     {sel.customer.name or '-'}")
        print(f"  Phone:    {sel.customer.phone or '-'}")
        print(f"  Email:    {sel.customer.email or '-'}")
        print(f"  WhatsApp: {sel.customer.whatsapp or '-'}")
        if self.form.state == FormState.CONFIRMED and self.form.confirmation:
            print(f"  Booking:  {self.form.confirmation.booking_id}")


async def _run(base_url: str, initial_date: Optional[date]) -> None:
    async with BookingApiClient(base_url, timeout=settings.api.timeout_sec) as client:
        console = ConsoleForm(BookingForm(client))
        await console.run(initial_date)


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Console appointment booking form")
    parser.add_argument(
        "--base-url",
        default=settings.api.base_url,
        help="Booking API base address",
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Preselect a date (YYYY-MM-DD)",
    )
    args = parser.parse_args(argv)

    try:
        asyncio.run(_run(args.base_url, args.date))
    except (KeyboardInterrupt, EOFError):
        print(f"\n{DIM}Session ended.{RESET}")
        sys.exit(0)


if __name__ == "__main__":
    main()
