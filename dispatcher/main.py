# dispatcher/main.py
"""Interactive menu for the dispatcher"""
from typing import Any, Dict, List

from dispatcher.dispatch import Assignment, DispatchEngine
from dispatcher.errors import DispatchError
from dispatcher.models import Order
from dispatcher.utils import format_time, setup_logging


MENU = """
==========================================
   ONLINE FOOD DELIVERY SYSTEM
==========================================
1. Place New Order
2. Assign Driver to Next Order
3. Track Order
4. Complete Delivery
5. View Order Summary
6. Show Pending Queue
7. Exit
=========================================="""


class OutputFormatter:
    """Formats and displays dispatch results"""

    @staticmethod
    def print_order_placed(order: Order):
        print("\n✅ Order placed successfully!")
        print(f"   Order ID: {order.order_id}")
        print(f"   Address: {order.delivery_address}")
        print(f"   Items: {', '.join(order.items) or 'none'}")
        print(f"   Status: {order.status.value}")
        print(f"   Time: {format_time(order.created_at)}")

    @staticmethod
    def print_assignment(assignment: Assignment):
        order, driver, delivery_time = assignment
        print("\n✅ Driver assigned successfully!")
        print(f"   Order ID: {order.order_id}")
        print(f"   Assigned Driver: {driver.name} (ID: {driver.driver_id})")
        print(f"   Estimated Delivery: {format_time(delivery_time)}")
        print(f"   Order Status: {order.status.value}")

    @staticmethod
    def print_tracking(view: Dict[str, Any]):
        print("\n📋 Order Tracking")
        print(f"   Order ID: {view['order_id']}")
        print(f"   Address: {view['delivery_address']}")
        print(f"   Items: {', '.join(view['items']) or 'none'}")
        print(f"   Status: {view['status']}")
        print(f"   Order Time: {format_time(view['created_at'])}")
        driver = view.get('driver')
        if driver:
            print(f"   Assigned Driver ID: {driver['driver_id']}")
            print(f"   Driver Name: {driver['name']}")
            print(f"   Next Available: {format_time(driver['next_available_at'])}")

    @staticmethod
    def print_completion(order: Order):
        print("\n✅ Delivery completed successfully!")
        print(f"   Order ID: {order.order_id}")
        print(f"   Driver {order.assigned_driver_id} is now available.")
        print(f"   Completion Time: {format_time(order.completed_at)}")

    @staticmethod
    def print_summary(summary: Dict[str, Any]):
        """Pretty print the order summary"""
        print("\n📊 ORDER SUMMARY")
        print("=" * 42)

        pending = summary['pending']
        print(f"\n⏳ PENDING ORDERS (in queue): {pending['count']}")
        print("-" * 42)
        OutputFormatter._print_pending(pending['orders'])

        active = summary['active']
        print("\n🚚 ACTIVE ORDERS (assigned to drivers):")
        print("-" * 42)
        for i, entry in enumerate(active['orders'], start=1):
            print(f"{i}. ID: {entry['order_id']} | Driver: {entry['driver_id']} | "
                  f"Address: {entry['delivery_address']}")
        if not active['orders']:
            print("No active orders.")

        completed = summary['completed']
        print(f"\n✅ COMPLETED ORDERS: {completed['count']}")
        print("-" * 42)
        for i, entry in enumerate(completed['recent'], start=1):
            print(f"{i}. ID: {entry['order_id']} | Address: {entry['delivery_address']} | "
                  f"Items: {entry['item_count']}")
        if completed['remaining'] > 0:
            print(f"... and {completed['remaining']} more.")

        print("\n👨‍🍳 DRIVER STATUS:")
        print("-" * 42)
        for driver in summary['drivers']:
            status = "Available" if driver['available'] else f"Busy until {format_time(driver['busy_until'])}"
            print(f"{driver['name']} (ID: {driver['driver_id']}): {status}")

        print("\n" + "=" * 42)

    @staticmethod
    def print_pending_queue(entries: List[Dict[str, Any]]):
        print("\n📋 Current Pending Queue (FIFO):")
        print("-" * 42)
        if not entries:
            print("Queue is empty.")
            return
        OutputFormatter._print_pending(entries, label="Order ID")

    @staticmethod
    def _print_pending(entries: List[Dict[str, Any]], label: str = "ID"):
        for i, entry in enumerate(entries, start=1):
            print(f"{i}. {label}: {entry['order_id']} | Address: {entry['delivery_address']} | "
                  f"Items: {entry['item_count']}")

    @staticmethod
    def print_error(error: DispatchError):
        icon = "ℹ️" if error.informational else "❌"
        print(f"\n{icon} {error.message}")


def _read_order() -> Dict[str, Any]:
    address = input("\nEnter customer address: ").strip()
    while True:
        raw = input("Enter number of items: ").strip()
        if raw.isdecimal():
            break
        print("Please enter a whole number.")
    items = [input(f"Enter item {i}: ").strip() for i in range(1, int(raw) + 1)]
    return {'address': address, 'items': items}


def run_menu(engine: DispatchEngine) -> None:
    """Menu loop: read a choice, call the engine, print the result"""
    while True:
        print(MENU)
        try:
            choice = input("Enter your choice (1-7): ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        try:
            if choice == '1':
                data = _read_order()
                OutputFormatter.print_order_placed(engine.place_order(data['address'], data['items']))
            elif choice == '2':
                OutputFormatter.print_assignment(engine.assign_driver())
            elif choice == '3':
                order_id = input("\nEnter order ID to track: ").strip()
                OutputFormatter.print_tracking(engine.track_order(order_id))
            elif choice == '4':
                order_id = input("\nEnter order ID to complete: ").strip()
                OutputFormatter.print_completion(engine.complete_delivery(order_id))
            elif choice == '5':
                OutputFormatter.print_summary(engine.summarize())
            elif choice == '6':
                OutputFormatter.print_pending_queue(engine.pending_queue_snapshot())
            elif choice == '7':
                print("\n👋 Thank you for using the Food Delivery System!")
                break
            else:
                print("\n❌ Invalid choice. Please enter 1-7.")
        except DispatchError as e:
            OutputFormatter.print_error(e)
        except (EOFError, KeyboardInterrupt):
            print()
            break


def main():
    """Main entry point"""
    setup_logging()
    engine = DispatchEngine.from_config()

    print("🚀 Online Food Delivery System Started!")
    print(f"Drivers on roster: {len(engine.drivers())}")
    run_menu(engine)


if __name__ == "__main__":
    main()
