from medreminder.extensions import db
from medreminder.models import Pharmacy, PharmacyStock
from medreminder.utils.geo import haversine_km


def upsert_stock(pharmacy_id, medication_id, quantity):
    """Set the quantity for (pharmacy, medication), creating the row on first use."""
    stock = PharmacyStock.query.filter_by(pharmacy_id=pharmacy_id, medication_id=medication_id).first()
    if stock is None:
        stock = PharmacyStock(pharmacy_id=pharmacy_id, medication_id=medication_id)
        db.session.add(stock)
    stock.quantity = quantity
    return stock


def search_pharmacies(medication_id, lat=None, lng=None):
    """Pharmacies holding the medication in stock, nearest first when a position is known."""
    rows = (
        db.session.query(Pharmacy, PharmacyStock.quantity)
        .join(PharmacyStock, PharmacyStock.pharmacy_id == Pharmacy.id)
        .filter(PharmacyStock.medication_id == medication_id, PharmacyStock.quantity > 0)
        .all()
    )

    has_position = lat is not None and lng is not None
    results = []
    for pharmacy, quantity in rows:
        distance = None
        if has_position and pharmacy.latitude is not None and pharmacy.longitude is not None:
            distance = round(haversine_km(lat, lng, pharmacy.latitude, pharmacy.longitude), 2)
        result = pharmacy.to_dict()
        result["quantity"] = quantity
        result["distance"] = distance
        results.append(result)

    if has_position:
        results.sort(key=lambda r: (r["distance"] is None, r["distance"] or 0.0, r["name"].casefold()))
    else:
        results.sort(key=lambda r: r["name"].casefold())
    return results


def count_stocked_pharmacies():
    return (
        db.session.query(PharmacyStock.pharmacy_id)
        .filter(PharmacyStock.quantity > 0)
        .distinct()
        .count()
    )
