# Food-service category catalog shown in the lead form.
# Order is display order; the tuple is never mutated.

FOOD_CATEGORIES = (
    "Бары",
    "Быстрое питание",
    "Доставка еды",
    "Кафе",
    "Кафе-кондитерские",
    "Кейтеринг",
    "Комбинаты питания",
    "Кофейни",
    "Кофейни автоматы",
    "Кулинарии",
    "Пекарни",
    "Пиццерии",
    "Рестораны",
    "Рюмочные",
    "Столовые",
    "Суши-бары",
    "Точки безалкогольных напитков",
    "Точки кофе",
    "Фудмоллы",
    "Чайные клубы",
)
