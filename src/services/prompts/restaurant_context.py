"""
Restaurant profile and menu used to ground every chat reply.

The context is plain constant data. It is rendered once into the system
prompt when the app is created and shared read-only by all requests.
"""
from typing import Iterable, Tuple

from pydantic import BaseModel, ConfigDict


class MenuItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    price: str


class RestaurantContext(BaseModel):
    """Business facts the assistant is allowed to answer from."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    hours: str
    address: str
    phone: str
    transport: str
    parking: str
    website: str
    payment: str
    service: str
    menu: Tuple[MenuItem, ...] = ()


DEFAULT_RESTAURANT_CONTEXT = RestaurantContext(
    name="高檔餐廳",
    description="本餐廳主打頂級牛排與新鮮海鮮，提供舒適優雅的用餐環境，適合家庭聚餐、商務宴請及浪漫約會。",
    hours="週一至週日 11:00 - 22:00",
    address="台北市信義區XX路XX號",
    phone="02-1234-5678",
    transport="捷運信義安和站步行5分鐘，公車信義路口站下車即達。",
    parking="本餐廳備有地下停車場，亦可於鄰近停車場停車。",
    website="https://luxury-restaurant.example.com",
    payment="現金、信用卡、行動支付皆可。",
    service="免費Wi-Fi、包廂、兒童座椅、素食選項、生日蛋糕預訂。",
    menu=(
        MenuItem(name="招牌牛排", price="$1200"),
        MenuItem(name="海鮮義大利麵", price="$800"),
        MenuItem(name="經典沙拉", price="$300"),
        MenuItem(name="松露薯條", price="$220"),
        MenuItem(name="手工甜點", price="$180"),
        MenuItem(name="主廚濃湯", price="$150"),
        MenuItem(name="香煎鴨胸", price="$950"),
        MenuItem(name="炙燒干貝", price="$680"),
        MenuItem(name="義式烤雞腿", price="$520"),
        MenuItem(name="蒜香奶油蝦", price="$480"),
        MenuItem(name="田園蔬菜烘蛋", price="$350"),
        MenuItem(name="法式洋蔥湯", price="$180"),
        MenuItem(name="經典提拉米蘇", price="$160"),
        MenuItem(name="現打果汁", price="$120"),
        MenuItem(name="精品咖啡", price="$100"),
    ),
)


SYSTEM_PROMPT_TEMPLATE = """
你是一位專業且友善的高檔餐廳客服助理。你的任務是根據你收到的資訊和以下的餐廳情境資料來回答使用者關於訂位、菜單或餐廳的問題。

請嚴格遵守以下規則：
1. 僅使用你提供的情境資訊來回答問題。
2. 保持專業、禮貌和熱情。
3. 如果資訊中沒有答案，請禮貌地告知使用者這超出了你的服務範圍。

[餐廳資訊]
餐廳名稱: {name}
簡介: {description}
地址: {address}
電話: {phone}
營業時間: {hours}
交通方式: {transport}
停車資訊: {parking}
付款方式: {payment}
服務設施: {service}
官方網站: {website}

[菜單]
{menu}
"""


def format_menu(menu: Iterable[MenuItem]) -> str:
    """Render menu items as `- name (price)` lines."""
    return "\n".join(f"- {item.name} ({item.price})" for item in menu)


def build_system_prompt(context: RestaurantContext = DEFAULT_RESTAURANT_CONTEXT) -> str:
    """
    Render the restaurant context into the grounding prompt.

    Args:
        context: Restaurant profile and menu

    Returns:
        Prompt text sent as the first user turn of every upstream request
    """
    return SYSTEM_PROMPT_TEMPLATE.format(
        name=context.name,
        description=context.description,
        address=context.address,
        phone=context.phone,
        hours=context.hours,
        transport=context.transport,
        parking=context.parking,
        payment=context.payment,
        service=context.service,
        website=context.website,
        menu=format_menu(context.menu),
    )
