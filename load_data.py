# load_data.py
"""
Load the sample job shop (catalog, orders, payments, expenses) into the database.
Run scripts/init_db.py first for a clean schema.
"""

from scripts.seed_demo import load_demo_data


def main():
    stats = load_demo_data()

    print("Load complete.")
    print(f"Orders loaded:         {stats['n_orders']}")
    print(f"Payments recorded:     {stats['n_payments']}")
    print(f"Expenses recorded:     {stats['n_expenses']}")
    print(f"Catalog rows:          "
          f"{stats['n_materials'] + stats['n_services'] + stats['n_machines'] + stats['n_staff']}")


if __name__ == "__main__":
    main()
