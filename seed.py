from app.core.database import SessionLocal
from app.models.product import Product
from app.models.transaction import Transaction, TransactionItem
from app.models.customer import Customer, VerisiyeTransaction
from app.models.kasa import (
    ExpenseCategory,
    ExpenseType,
    ExpenseProduct,
    DailyBalanceSheet,
    BalanceSheetExpense,
    ShopPurchase,
)
from app.schemas.balance_sheet import BalanceSheetSubmit, ExpenseLineCreate, PurchaseLineCreate
from app.schemas.transaction import TransactionCreate, TransactionItemCreate
from app.services.balance_sheet_service import submit_day
from app.services.transaction_service import create_transaction
from app.services.verisiye_service import create_verisiye_transaction
from app.utils.shop_time import now_local, today_local

from faker import Faker
import random
from datetime import timedelta
from decimal import Decimal

fake = Faker("tr_TR")
TWO = Decimal("0.01")

EXPENSE_NAMES = {
    ExpenseCategory.cash: ["Ekmek", "Su", "Temizlik", "Kargo"],
    ExpenseCategory.card: ["Elektrik", "Internet", "Toptanci"],
    ExpenseCategory.carry_forward: ["Kira", "Maas"],
}
EXPENSE_TYPE_FOR = {
    ExpenseCategory.cash: ExpenseType.cash_expense,
    ExpenseCategory.card: ExpenseType.card_expense,
    ExpenseCategory.carry_forward: ExpenseType.carry_forward_expense,
}


def money(low, high) -> Decimal:
    return Decimal(str(random.uniform(low, high))).quantize(TWO)


db = SessionLocal()

try:
    print("🔄 Clearing existing data...")
    db.query(ShopPurchase).delete()
    db.query(BalanceSheetExpense).delete()
    db.query(DailyBalanceSheet).delete()
    db.query(ExpenseProduct).delete()
    db.query(VerisiyeTransaction).delete()
    db.query(Customer).delete()
    db.query(TransactionItem).delete()
    db.query(Transaction).delete()
    db.query(Product).delete()
    db.commit()
    print("✅ Data cleared.")

    print("🔄 Creating products...")
    products = []
    for _ in range(40):
        price_buy = money(5, 150)
        is_by_weight = random.random() < 0.15
        products.append(Product(
            barcode=fake.unique.ean13(),
            name=fake.word().capitalize(),
            price_buy=price_buy,
            price_sell=(price_buy * Decimal("1.3")).quantize(TWO),
            stock=random.randint(10, 200),
            category=random.choice(["Gida", "Icecek", "Temizlik", "Sarkuteri"]),
            expire_date=fake.date_between(start_date="+10d", end_date="+1y"),
            is_by_weight=is_by_weight,
            price_per_kg=money(50, 400) if is_by_weight else None,
            unit="kg" if is_by_weight else "piece",
        ))
    db.add_all(products)
    db.commit()
    print(f"✅ Seeded {len(products)} products")

    print("🔄 Creating expense products...")
    expense_products = []
    for category, names in EXPENSE_NAMES.items():
        for name in names:
            expense_products.append(ExpenseProduct(name=name, category=category, is_active=True))
    db.add_all(expense_products)
    db.commit()
    print(f"✅ Seeded {len(expense_products)} expense products")

    print("🔄 Creating customers and verisiye...")
    customers = []
    for _ in range(random.randint(15, 25)):
        customers.append(Customer(
            name=fake.name(),
            house_no=str(random.randint(1, 120)),
            phone=f"05{random.randint(300000000, 599999999)}",
            total_credit=0,
        ))
    db.add_all(customers)
    db.commit()

    entries = 0
    for customer in customers:
        for _ in range(random.randint(0, 5)):
            create_verisiye_transaction(
                db,
                customer_id=customer.id,
                amount=money(10, 400),
                description=fake.sentence(nb_words=3),
                created_by="seed",
            )
            entries += 1
    print(f"✅ Seeded {len(customers)} customers")
    print(f"✅ Seeded {entries} verisiye entries")

    print("🔄 Creating sales and balance sheets for the last week...")
    sales = 0
    for days_ago in range(7, 0, -1):
        day = today_local() - timedelta(days=days_ago)
        opening = now_local().replace(year=day.year, month=day.month, day=day.day, hour=9, minute=0, second=0, microsecond=0)

        for n in range(random.randint(5, 15)):
            basket = random.sample(products, k=random.randint(1, 4))
            items = []
            total_amount = Decimal("0.00")
            total_profit = Decimal("0.00")
            for product in basket:
                quantity = 1 if product.is_by_weight else random.randint(1, 3)
                items.append(TransactionItemCreate(
                    product_id=product.id,
                    name=product.name,
                    quantity=quantity,
                    price_at_sale=product.price_sell,
                    cost_at_sale=product.price_buy,
                    is_by_weight=product.is_by_weight,
                    weight=Decimal("0.500") if product.is_by_weight else None,
                ))
                total_amount += product.price_sell * quantity
                total_profit += (product.price_sell - product.price_buy) * quantity

            create_transaction(db, TransactionCreate(
                date=opening + timedelta(minutes=37 * n),
                total_amount=total_amount,
                total_profit=total_profit,
                items=items,
            ))
            sales += 1

        expenses = []
        for product in random.sample(expense_products, k=3):
            price = money(20, 300)
            expenses.append(ExpenseLineCreate(
                expense_product_id=product.id,
                expense_type=EXPENSE_TYPE_FOR[product.category],
                quantity=1,
                unit_price=price,
                total_price=price,
            ))

        restock = random.choice(expense_products)
        unit_cost = money(10, 80)
        submit_day(db, BalanceSheetSubmit(
            sheet_date=day,
            credit_extended=money(0, 200),
            cash_counted=money(300, 2000),
            card_terminal_amount=money(200, 1500),
            created_by="seed",
            expenses=expenses,
            shop_purchases=[PurchaseLineCreate(
                expense_product_id=restock.id,
                quantity=5,
                unit_cost=unit_cost,
                total_cost=unit_cost * 5,
                supplier=fake.company(),
            )],
        ))
        print(f"📒 Balance sheet submitted for {day}")

    print(f"✅ Seeded {sales} sales")
    print("🎉 All data seeded successfully!")

except Exception as e:
    db.rollback()
    print(f"❌ SEEDING FAILED: {e}")
finally:
    db.close()
