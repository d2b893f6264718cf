# debug_recommendations.py
import asyncio
import json

from staywise.main import build_engine
from staywise.schemas import ItineraryItem, RecommendationCriteria


async def main():
    engine = build_engine()

    criteria = RecommendationCriteria(
        destination="Rio de Janeiro",
        budget="2500",
        travel_style=["luxury", "cultural"],
        itinerary_locations=["Copacabana", "Ipanema", "Corcovado"],
        check_in="2025-02-01",
        check_out="2025-02-06",
    )

    # Call the engine directly
    result = await engine.recommend(criteria)
    print("➡️ Flat recommendations:\n")
    print(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False))

    itinerary = [
        ItineraryItem(date="2025-05-01", title="Eiffel Tower", location="Champ de Mars, Paris"),
        ItineraryItem(date="2025-05-02", title="Louvre", location="Rue de Rivoli, Paris"),
        ItineraryItem(date="2025-05-03", title="Colosseum", location="Piazza del Colosseo, Rome"),
    ]
    cities = await engine.generate_city_based_recommendations(itinerary, budget="1500")
    print("\n➡️ Per-city recommendations:\n")
    print(json.dumps([c.model_dump(mode="json", by_alias=True) for c in cities], indent=2, ensure_ascii=False))


if __name__ == "__main__":
    asyncio.run(main())
