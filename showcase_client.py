#!/usr/bin/env python3
"""
TUI Client for the Pre-Owned Vehicle Showcase.

Navigation uses the same location fragments as the web front end
(#/, #/vehicle/{id}, #/admin, #/upload, #/download). Type a fragment at any
menu prompt to jump straight to that view.
"""
import os
from typing import Optional, Dict, List

import requests
from pydantic import ValidationError

from showcase.services.salesperson_gate import SalespersonGate
from showcase.services.vehicle_editor import VehicleDraft, validate_draft
from showcase.views.carousel import PhotoCarousel
from showcase.views.router import Route, View, HOME, resolve, fragment_for


PRICE_BRACKET_CHOICES = [
    ("all", "All Prices"),
    ("under-15k", "Under $15,000"),
    ("15k-25k", "$15,000 - $25,000"),
    ("25k-35k", "$25,000 - $35,000"),
    ("35k-50k", "$35,000 - $50,000"),
    ("over-50k", "Over $50,000"),
]

EXT_TO_CONTENT_TYPE = {
    '.jpg': 'image/jpeg', '.jpeg': 'image/jpeg', '.png': 'image/png',
    '.gif': 'image/gif', '.webp': 'image/webp', '.heic': 'image/heic',
}

UNEXPECTED_ERROR_MESSAGE = "Something went wrong. Please reload the page."

EDITABLE_FIELDS = [
    "stock_number", "year", "make", "model", "trim", "mileage", "price",
    "exterior_color", "interior_color", "transmission", "engine",
    "description", "assigned_salesperson",
]


def format_price(price: float) -> str:
    if not price:
        return "Price To Be Determined"
    return f"${price:,.0f}"


def vehicle_title(vehicle: Dict) -> str:
    title = f"{vehicle['year']} {vehicle['make']} {vehicle['model']}"
    if vehicle.get('trim'):
        title += f" {vehicle['trim']}"
    return title


class ServerSalespersonGate(SalespersonGate):
    """Session sign-in flag whose code check is answered by the server."""

    def __init__(self, client: "ShowcaseClient"):
        super().__init__(upload_code="")
        self.client = client

    def check(self, name: str, code: str) -> bool:
        if not (name or "").strip():
            return False
        return self.client.verify_sign_in(name, code)


class ShowcaseClient:
    def __init__(self, base_url: str = "http://127.0.0.1:8000"):
        self.base_url = base_url
        self.route: Route = HOME
        # Salesperson sign-in flag; kept for the whole session
        self.gate = ServerSalespersonGate(self)
        self.photo_slots: List[Dict] = []

    def clear_screen(self):
        os.system('clear' if os.name == 'posix' else 'cls')

    def print_header(self):
        print("=" * 70)
        print(" Pre-Owned Vehicle Showcase".center(70))
        print("=" * 70)
        location = f" Location: {fragment_for(self.route)}"
        if self.gate.authenticated:
            location += f" | Salesperson: {self.gate.salesperson_name}"
        print(location.ljust(70))
        print("=" * 70)

    def _detail(self, response: requests.Response, fallback: str) -> str:
        try:
            detail = response.json().get('detail', fallback)
        except ValueError:
            return fallback
        if isinstance(detail, list):
            return "; ".join(d.get('msg', fallback) for d in detail)
        return detail

    # ─── API Methods ───────────────────────────────────────────────────

    def get_vehicles(self, search: str = "", price_bracket: str = "all") -> List[Dict]:
        """Fetch the active inventory grid."""
        try:
            response = requests.get(
                f"{self.base_url}/api/vehicles",
                params={"search": search, "price_bracket": price_bracket},
                timeout=10
            )
            if response.status_code == 200:
                return response.json()
            print(f"  Failed to load vehicles: {self._detail(response, 'Please refresh the page.')}")
            return []
        except requests.RequestException as e:
            print(f"  Error: {e}")
            return []

    def get_vehicle(self, vehicle_id: str) -> Optional[Dict]:
        """Fetch a vehicle with its photos."""
        try:
            response = requests.get(f"{self.base_url}/api/vehicles/{vehicle_id}", timeout=10)
            if response.status_code == 200:
                return response.json()
            print(f"  {self._detail(response, 'Vehicle not found')}")
            return None
        except requests.RequestException as e:
            print(f"  Error: {e}")
            return None

    def get_photo_slots(self) -> List[Dict]:
        if not self.photo_slots:
            try:
                response = requests.get(f"{self.base_url}/api/photo-slots", timeout=5)
                if response.status_code == 200:
                    self.photo_slots = response.json()
            except requests.RequestException as e:
                print(f"  Error: {e}")
        return self.photo_slots

    def submit_inquiry(self, vehicle_id: str, name: str, email: str, phone: str, message: str) -> bool:
        try:
            response = requests.post(
                f"{self.base_url}/api/inquiries",
                json={
                    "vehicle_id": vehicle_id,
                    "customer_name": name,
                    "customer_email": email,
                    "customer_phone": phone,
                    "message": message,
                },
                timeout=10
            )
            if response.status_code == 201:
                return True
            print(f"  {self._detail(response, 'There was an error submitting your inquiry. Please try again.')}")
            return False
        except requests.RequestException as e:
            print(f"  Error: {e}")
            return False

    def verify_sign_in(self, name: str, code: str) -> bool:
        """Ask the server whether the name + upload code pair is accepted."""
        try:
            response = requests.post(
                f"{self.base_url}/api/salesperson/sign-in",
                json={"name": name, "code": code},
                timeout=5
            )
            if response.status_code == 200:
                return True
            print(f"  {self._detail(response, 'Invalid code or missing name. Please try again.')}")
            return False
        except requests.RequestException as e:
            print(f"  Error: {e}")
            return False

    def upload_photo(self, vehicle_id: str, slot: str, filepath: str) -> Optional[Dict]:
        """Upload an image file into a photo slot."""
        filepath = os.path.expanduser(filepath)
        if not os.path.isfile(filepath):
            print(f"  File not found: {filepath}")
            return None

        filename = os.path.basename(filepath)
        ext = os.path.splitext(filename)[1].lower()
        content_type = EXT_TO_CONTENT_TYPE.get(ext, 'application/octet-stream')
        try:
            with open(filepath, 'rb') as f:
                response = requests.post(
                    f"{self.base_url}/api/vehicles/{vehicle_id}/photos/{slot}",
                    files={"file": (filename, f, content_type)},
                    timeout=120
                )
            if response.status_code == 201:
                return response.json()
            print(f"  Upload failed: {self._detail(response, 'Upload failed')}")
            return None
        except (OSError, requests.RequestException) as e:
            print(f"  Upload error: {e}")
            return None

    def delete_photo(self, photo_id: str) -> bool:
        try:
            response = requests.delete(f"{self.base_url}/api/photos/{photo_id}", timeout=10)
            if response.status_code == 204:
                return True
            print(f"  {self._detail(response, 'Error deleting photo. Please try again.')}")
            return False
        except requests.RequestException as e:
            print(f"  Error: {e}")
            return False

    def update_price(self, vehicle_id: str, price: float) -> bool:
        try:
            response = requests.patch(
                f"{self.base_url}/api/vehicles/{vehicle_id}/price",
                json={"price": price},
                timeout=10
            )
            if response.status_code == 200:
                return True
            print(f"  {self._detail(response, 'Error updating price. Please try again.')}")
            return False
        except requests.RequestException as e:
            print(f"  Error: {e}")
            return False

    def check_stock_number(self, stock_number: str, exclude_id: Optional[str] = None) -> bool:
        """True when no other vehicle uses the stock number."""
        params = {"stock_number": stock_number}
        if exclude_id:
            params["exclude_id"] = exclude_id
        try:
            response = requests.get(
                f"{self.base_url}/api/vehicles/stock-number-check", params=params, timeout=5
            )
            return response.status_code == 200 and response.json()["available"]
        except requests.RequestException as e:
            print(f"  Error: {e}")
            return False

    def save_vehicle(self, draft: VehicleDraft, vehicle_id: Optional[str] = None) -> Optional[Dict]:
        record = draft.to_record()
        try:
            if vehicle_id:
                response = requests.put(f"{self.base_url}/api/vehicles/{vehicle_id}", json=record, timeout=10)
            else:
                response = requests.post(f"{self.base_url}/api/vehicles", json=record, timeout=10)
            if response.status_code in (200, 201):
                return response.json()
            print(f"  {self._detail(response, 'Error saving vehicle. Please try again.')}")
            return None
        except requests.RequestException as e:
            print(f"  Error: {e}")
            return None

    def mark_sold(self, vehicle_id: str) -> bool:
        try:
            response = requests.post(f"{self.base_url}/api/vehicles/{vehicle_id}/sold", timeout=10)
            if response.status_code == 200:
                return True
            print(f"  {self._detail(response, 'Error updating vehicle. Please try again.')}")
            return False
        except requests.RequestException as e:
            print(f"  Error: {e}")
            return False

    def delete_vehicle(self, vehicle_id: str) -> bool:
        try:
            response = requests.delete(f"{self.base_url}/api/vehicles/{vehicle_id}", timeout=30)
            if response.status_code == 204:
                return True
            print(f"  {self._detail(response, 'Error deleting vehicle. Please try again.')}")
            return False
        except requests.RequestException as e:
            print(f"  Error: {e}")
            return False

    def get_admin_vehicles(self) -> List[Dict]:
        try:
            response = requests.get(f"{self.base_url}/api/admin/vehicles", timeout=10)
            if response.status_code == 200:
                return response.json()
            print(f"  {self._detail(response, 'Failed to load vehicles')}")
            return []
        except requests.RequestException as e:
            print(f"  Error: {e}")
            return []

    def get_admin_inquiries(self) -> List[Dict]:
        try:
            response = requests.get(f"{self.base_url}/api/admin/inquiries", timeout=10)
            if response.status_code == 200:
                return response.json()
            return []
        except requests.RequestException as e:
            print(f"  Error: {e}")
            return []

    # ─── Views ─────────────────────────────────────────────────────────

    def prompt(self, text: str) -> str:
        """Read input; a location fragment typed here navigates immediately."""
        answer = input(text).strip()
        if answer.startswith("#"):
            raise NavigateTo(answer)
        return answer

    def show_home(self) -> str:
        search = ""
        bracket = "all"
        while True:
            self.clear_screen()
            self.print_header()
            vehicles = self.get_vehicles(search, bracket)
            count = len(vehicles)
            print(f"\n{count} {'Vehicle' if count == 1 else 'Vehicles'} Available")
            if search or bracket != "all":
                print(f"  Search: '{search}'  Price: {dict(PRICE_BRACKET_CHOICES)[bracket]}")
            print("-" * 70)
            for i, vehicle in enumerate(vehicles, 1):
                photo = " [photo]" if vehicle.get('primary_photo_url') else ""
                print(f"{i:3}. {vehicle_title(vehicle):<40} {format_price(vehicle['price']):>22}{photo}")
                print(f"     Stock #{vehicle['stock_number']} | {vehicle['mileage']:,} miles")
            print("-" * 70)
            print("Number = view vehicle | s = search | p = price range | q = quit")
            print("Or type a location: #/admin  #/upload  #/download")

            choice = self.prompt("\n> ").lower()
            if choice == "q":
                return ""
            if choice == "s":
                search = self.prompt("Search by make, model, year, or stock number: ")
            elif choice == "p":
                for i, (_, label) in enumerate(PRICE_BRACKET_CHOICES, 1):
                    print(f"  {i}. {label}")
                pick = self.prompt("Price range: ")
                if pick.isdigit() and 1 <= int(pick) <= len(PRICE_BRACKET_CHOICES):
                    bracket = PRICE_BRACKET_CHOICES[int(pick) - 1][0]
            elif choice.isdigit() and 1 <= int(choice) <= count:
                return fragment_for(Route(View.VEHICLE_DETAIL, vehicles[int(choice) - 1]['id']))

    def show_vehicle_detail(self, vehicle_id: str) -> str:
        detail = self.get_vehicle(vehicle_id)
        if detail is None:
            input("\nPress Enter to return home...")
            return "#/"

        vehicle = detail['vehicle']
        carousel = PhotoCarousel(detail['photos'])
        while True:
            self.clear_screen()
            self.print_header()
            print(f"\n{vehicle_title(vehicle)}")
            print(f"  {format_price(vehicle['price'])} | Stock #{vehicle['stock_number']} | {vehicle['mileage']:,} miles")
            print(f"  Exterior: {vehicle['exterior_color'] or '-'} | Interior: {vehicle['interior_color'] or '-'}")
            print(f"  Transmission: {vehicle['transmission'] or '-'} | Engine: {vehicle['engine'] or '-'}")
            if vehicle['features']:
                print(f"  Features: {', '.join(vehicle['features'])}")
            if vehicle['description']:
                print(f"\n  {vehicle['description']}")

            print("\nPhotos:")
            if carousel.current:
                print(f"  {carousel.caption()}")
                print(f"  {carousel.current['photo_url']}")
            else:
                print("  No photos available")

            print("\nn = next photo | b = previous photo | i = inquire | h = home")
            choice = self.prompt("\n> ").lower()
            if choice == "n":
                carousel.next()
            elif choice == "b":
                carousel.previous()
            elif choice == "i":
                self.inquiry_form(vehicle)
            elif choice == "h":
                return "#/"

    def inquiry_form(self, vehicle: Dict):
        print(f"\nInterested in the {vehicle_title(vehicle)}?")
        name = self.prompt("Your name*: ")
        email = self.prompt("Email*: ")
        phone = self.prompt("Phone: ")
        message = self.prompt("Message: ")
        if not name or not email:
            print("  Name and email are required.")
        elif self.submit_inquiry(vehicle['id'], name, email, phone, message):
            print("\n  Thank you! A member of our sales team will contact you shortly.")
        input("\nPress Enter to continue...")

    def show_upload(self) -> str:
        self.clear_screen()
        self.print_header()
        if not self.gate.authenticated:
            print("\nSalesperson Sign-In")
            print("For Salespeople: Contact your manager for the upload code.")
            name = self.prompt("\nYour name: ")
            code = self.prompt("Upload code: ")
            if not self.gate.sign_in(name, code):
                input("\nPress Enter to continue...")
                return "#/"

        while True:
            self.clear_screen()
            self.print_header()
            vehicles = self.get_vehicles()
            print("\nSelect a vehicle to photograph:")
            for i, vehicle in enumerate(vehicles, 1):
                print(f"{i:3}. Stock #{vehicle['stock_number']:<10} {vehicle_title(vehicle)}")
            print("\nNumber = select | o = sign out | h = home")
            choice = self.prompt("\n> ").lower()
            if choice == "h":
                return "#/"
            if choice == "o":
                self.gate.sign_out()
                return "#/"
            if choice.isdigit() and 1 <= int(choice) <= len(vehicles):
                self.photo_manager(vehicles[int(choice) - 1])

    def photo_manager(self, vehicle: Dict):
        slots = self.get_photo_slots()
        while True:
            detail = self.get_vehicle(vehicle['id'])
            if detail is None:
                return
            by_slot = {p['photo_type']: p for p in detail['photos']}
            self.clear_screen()
            self.print_header()
            print(f"\n{vehicle_title(detail['vehicle'])} - {format_price(detail['vehicle']['price'])}")
            print("-" * 70)
            for i, slot in enumerate(slots, 1):
                marker = "✓" if slot['slot'] in by_slot else ("*" if slot['required'] else " ")
                print(f"{i:3}. [{marker}] {slot['label']}")
            if detail['missing_required_slots']:
                print(f"\n  {len(detail['missing_required_slots'])} required photo(s) still missing")
            print("\nNumber = upload into slot | d<number> = delete photo | $ = set price | b = back")

            choice = self.prompt("\n> ").lower()
            if choice == "b":
                return
            if choice == "$":
                raw = self.prompt("New price: ").replace(",", "").replace("$", "")
                try:
                    price = float(raw)
                except ValueError:
                    print("  Please enter a valid price")
                    input("\nPress Enter to continue...")
                    continue
                if self.update_price(vehicle['id'], price):
                    print("  Price updated successfully!")
                input("\nPress Enter to continue...")
            elif choice.startswith("d") and choice[1:].isdigit():
                index = int(choice[1:]) - 1
                if 0 <= index < len(slots) and slots[index]['slot'] in by_slot:
                    if self.delete_photo(by_slot[slots[index]['slot']]['id']):
                        print("  Photo deleted.")
                    input("\nPress Enter to continue...")
            elif choice.isdigit() and 1 <= int(choice) <= len(slots):
                slot = slots[int(choice) - 1]
                path = self.prompt(f"Image file for {slot['label']}: ")
                if path and self.upload_photo(vehicle['id'], slot['slot'], path):
                    print("  Photo uploaded.")
                input("\nPress Enter to continue...")

    def show_admin(self) -> str:
        while True:
            self.clear_screen()
            self.print_header()
            vehicles = self.get_admin_vehicles()
            print("\nInventory")
            print("-" * 70)
            for i, vehicle in enumerate(vehicles, 1):
                print(f"{i:3}. Stock #{vehicle['stock_number']:<10} {vehicle_title(vehicle):<32} {vehicle['status']:<8} {format_price(vehicle['price'])}")
            print("-" * 70)
            print("a = add vehicle | e<n> = edit | s<n> = mark sold | x<n> = delete | i = inquiries | h = home")
            choice = self.prompt("\n> ").lower()

            if choice == "h":
                return "#/"
            if choice == "a":
                self.vehicle_form()
            elif choice == "i":
                self.show_inquiries()
            elif len(choice) > 1 and choice[0] in "esx" and choice[1:].isdigit():
                index = int(choice[1:]) - 1
                if not 0 <= index < len(vehicles):
                    continue
                vehicle = vehicles[index]
                if choice[0] == "e":
                    self.vehicle_form(vehicle)
                elif choice[0] == "s":
                    self.mark_sold(vehicle['id'])
                elif self.prompt(f"Delete stock #{vehicle['stock_number']}? (y/n): ").lower() == "y":
                    self.delete_vehicle(vehicle['id'])

    def vehicle_form(self, vehicle: Optional[Dict] = None):
        """Edit a VehicleDraft field by field; each edit yields a new draft."""
        draft = VehicleDraft.model_validate(vehicle) if vehicle else VehicleDraft()
        vehicle_id = vehicle['id'] if vehicle else None

        while True:
            self.clear_screen()
            self.print_header()
            print(f"\n{'Edit Vehicle' if vehicle else 'Add New Vehicle'}")
            print("-" * 70)
            for i, name in enumerate(EDITABLE_FIELDS, 1):
                print(f"{i:3}. {name.replace('_', ' ').title():<22} {getattr(draft, name)}")
            print(f"     Features: {', '.join(draft.features) or '-'}")
            print("-" * 70)
            print("Number = edit field | f = add feature | r<n> = remove feature n | s = save | c = cancel")

            choice = self.prompt("\n> ").lower()
            if choice == "c":
                return
            if choice == "f":
                draft = draft.add_feature(self.prompt("Feature: "))
            elif choice.startswith("r") and choice[1:].isdigit():
                draft = draft.remove_feature(int(choice[1:]) - 1)
            elif choice.isdigit() and 1 <= int(choice) <= len(EDITABLE_FIELDS):
                name = EDITABLE_FIELDS[int(choice) - 1]
                value = self.prompt(f"{name.replace('_', ' ').title()}: ")
                try:
                    draft = draft.with_field(name, value)
                except ValidationError:
                    print(f"  Invalid value for {name}")
                    input("\nPress Enter to continue...")
                    continue
                if name == "stock_number" and not self.check_stock_number(value, vehicle_id):
                    print(f"  Warning: A vehicle with stock number {value} already exists")
                    input("\nPress Enter to continue...")
            elif choice == "s":
                errors = validate_draft(draft)
                if errors:
                    for error in errors:
                        print(f"  {error}")
                elif self.save_vehicle(draft, vehicle_id):
                    print("  Vehicle saved.")
                    input("\nPress Enter to continue...")
                    return
                input("\nPress Enter to continue...")

    def show_inquiries(self):
        self.clear_screen()
        self.print_header()
        entries = self.get_admin_inquiries()
        print(f"\nCustomer Inquiries ({len(entries)})")
        print("-" * 70)
        for entry in entries:
            inquiry = entry['inquiry']
            vehicle = entry.get('vehicle')
            about = f"{vehicle['year']} {vehicle['make']} {vehicle['model']} (Stock #{vehicle['stock_number']})" if vehicle else "Vehicle no longer listed"
            print(f"{inquiry['created_at'][:16]}  {inquiry['customer_name']} <{inquiry['customer_email']}> {inquiry['customer_phone']}")
            print(f"  Re: {about}")
            if inquiry['assigned_salesperson']:
                print(f"  Salesperson: {inquiry['assigned_salesperson']}")
            if inquiry['message']:
                print(f"  {inquiry['message']}")
            print()
        input("Press Enter to continue...")

    def show_download(self) -> str:
        self.clear_screen()
        self.print_header()
        print("\nPre-Owned Vehicle Showcase")
        print("\nSystem features:")
        print("  - Vehicle inventory with search and price filtering")
        print("  - Photo uploads for salespeople (nine slots per vehicle)")
        print("  - Customer inquiry forms with e-mail notifications")
        print("  - Admin dashboard for vehicles and inquiries")
        print(f"\nAPI documentation: {self.base_url}/docs")
        input("\nPress Enter to return home...")
        return "#/"

    def render(self, route: Route) -> str:
        if route.view == View.VEHICLE_DETAIL:
            return self.show_vehicle_detail(route.vehicle_id)
        if route.view == View.ADMIN:
            return self.show_admin()
        if route.view == View.UPLOAD:
            return self.show_upload()
        if route.view == View.DOWNLOAD:
            return self.show_download()
        return self.show_home()

    def show_error(self, error: Exception) -> str:
        """Generic error screen. Enter reloads the current view, q quits."""
        self.clear_screen()
        self.print_header()
        print(f"\n{UNEXPECTED_ERROR_MESSAGE}")
        print(f"  ({error.__class__.__name__}: {error})")
        try:
            choice = input("\nPress Enter to reload, or q to quit: ").strip().lower()
        except (KeyboardInterrupt, EOFError):
            return ""
        return "" if choice == "q" else fragment_for(self.route)

    def run(self, fragment: str = "#/"):
        """Main entry point."""
        while True:
            self.route = resolve(fragment)
            try:
                fragment = self.render(self.route)
            except NavigateTo as nav:
                fragment = nav.fragment
            except (KeyboardInterrupt, EOFError):
                fragment = ""
            except Exception as e:
                fragment = self.show_error(e)
            if not fragment:
                break

        print("\nGoodbye!")


class NavigateTo(Exception):
    """Raised from a prompt when the user types a location fragment."""

    def __init__(self, fragment: str):
        self.fragment = fragment
        super().__init__(fragment)


if __name__ == "__main__":
    import sys
    client = ShowcaseClient(os.environ.get("SHOWCASE_URL", "http://127.0.0.1:8000"))
    client.run(sys.argv[1] if len(sys.argv) > 1 else "#/")
