import math

from sqlalchemy import or_

from fitclub.errors import NotFoundError
from fitclub.models import Gym

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1, lng1, lat2, lng2):
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


def list_gyms(session):
    return session.query(Gym).filter(Gym.is_active.is_(True)).order_by(Gym.name.asc()).all()


def get_gym(session, gym_id):
    gym = session.get(Gym, gym_id)
    if gym is None or not gym.is_active:
        raise NotFoundError("Gym")
    return gym


def search_gyms(session, q=None, city=None):
    query = session.query(Gym).filter(Gym.is_active.is_(True))
    if q:
        pattern = f"%{q}%"
        query = query.filter(or_(Gym.name.ilike(pattern), Gym.address.ilike(pattern)))
    if city:
        query = query.filter(Gym.city.ilike(f"%{city}%"))
    return query.order_by(Gym.name.asc()).all()


def nearby_gyms(session, lat, lng, radius_km):
    """Active gyms within ``radius_km``, nearest first.

    A full scan with the haversine formula; fine for a club-sized table.
    """
    results = []
    for gym in list_gyms(session):
        if gym.latitude is None or gym.longitude is None:
            continue
        distance = haversine_km(lat, lng, gym.latitude, gym.longitude)
        if distance <= radius_km:
            results.append((gym, round(distance, 2)))
    results.sort(key=lambda pair: pair[1])
    return results
