"""
Datos iniciales del sitio.

Casas de ejemplo, contenido por defecto del sitio y reseñas/reservas
de muestra para entornos de desarrollo.
"""

from datetime import date

from safr.models import (
    Booking,
    House,
    LocalizedText,
    MapLocation,
    Review,
    SiteSettings,
    SocialMedia,
)

DEFAULT_SITE_TITLE = "Safr Kurdistan"
DEFAULT_HEADER_DESCRIPTION = "Perfect for Iraqi families visiting Kurdistan"
DEFAULT_HERO_TITLE = "Find Your Perfect Summer House in Kurdistan"
DEFAULT_HERO_SUBTITLE = "Escape the Iraqi summer heat in the cool mountains of Kurdistan"
DEFAULT_FOOTER_DESCRIPTION = (
    "Your gateway to cool, comfortable summer vacations "
    "in the beautiful mountains of Kurdistan."
)
DEFAULT_HERO_VIDEO_URL = (
    "https://videos.pexels.com/video-files/4009409/4009409-uhd_2560_1440_25fps.mp4"
)
DEFAULT_CONTACT_PHONE = "+964 750 000 0000"
DEFAULT_CONTACT_EMAIL = "info@kurdistanhouses.com"


def default_site_settings() -> SiteSettings:
    """Contenido inicial del sitio en los tres idiomas."""
    return SiteSettings(
        site_title=LocalizedText(
            en=DEFAULT_SITE_TITLE,
            ar="سافر كوردستان",
            ku="گەشتی کوردستان",
        ),
        header_description=LocalizedText(
            en=DEFAULT_HEADER_DESCRIPTION,
            ar="مثالي للعائلات العراقية التي تزور كردستان",
            ku="تەواو بۆ خێزانە عێراقییەکان کە سەردانی کوردستان دەکەن",
        ),
        hero_title=LocalizedText(
            en=DEFAULT_HERO_TITLE,
            ar="اعثر على بيت الصيف المثالي في كردستان",
            ku="خانووی هاوینی تەواوی خۆت لە کوردستان بدۆزەرەوە",
        ),
        hero_subtitle=LocalizedText(
            en=DEFAULT_HERO_SUBTITLE,
            ar="اهرب من حر الصيف العراقي في جبال كردستان الباردة",
            ku="لە گەرمی هاوینی عێراق دەرباز ببە لە چیا ساردەکانی کوردستان",
        ),
        hero_video_url=DEFAULT_HERO_VIDEO_URL,
        footer_description=LocalizedText(
            en=DEFAULT_FOOTER_DESCRIPTION,
            ar="بوابتك إلى عطلات صيفية باردة ومريحة في جبال كردستان الجميلة.",
            ku="دەرگاکەت بۆ پشووی هاوینی سارد و ئاسوودە لە چیا جوانەکانی کوردستان.",
        ),
        contact_phone=DEFAULT_CONTACT_PHONE,
        contact_whatsapp=DEFAULT_CONTACT_PHONE,
        contact_email=DEFAULT_CONTACT_EMAIL,
        social_media=SocialMedia(),
        updated_by="system",
    )


def default_houses() -> list[House]:
    """Casas publicadas al inicializar un store vacío."""
    return [
        House(
            id="house-1",
            title="Mountain View Villa in Zawita",
            area="Zawita",
            city="Duhok",
            price=180,
            currency="USD",
            rating=4.9,
            reviews=32,
            bedrooms=4,
            bathrooms=3,
            guests=10,
            parking=True,
            available=True,
            images=["/placeholder.svg?height=300&width=400"],
            description="Luxury villa with panoramic mountain views, perfect for large families.",
            amenities=["WiFi", "AC", "Kitchen", "Garden", "Mountain View", "BBQ Area"],
            phone="+964 750 123 4567",
            whatsapp="+964 750 123 4567",
            map_location=MapLocation(lat=37.0469, lng=43.0889),
        ),
        House(
            id="house-2",
            title="Cozy Family House in Zawita",
            area="Zawita",
            city="Duhok",
            price=120,
            currency="USD",
            rating=4.7,
            reviews=28,
            bedrooms=3,
            bathrooms=2,
            guests=8,
            parking=True,
            available=True,
            images=["/placeholder.svg?height=300&width=400"],
            description="Comfortable family house with traditional Kurdish architecture.",
            amenities=["WiFi", "Kitchen", "Garden", "Traditional Design"],
            phone="+964 750 123 4568",
            whatsapp="+964 750 123 4568",
            map_location=MapLocation(lat=37.0479, lng=43.0899),
        ),
    ]


def sample_reviews() -> list[Review]:
    """Reseñas de muestra para las casas por defecto."""
    return [
        Review(
            id="review-1",
            house_id="house-1",
            user_id="user-sample-1",
            user_name="Ahmed Al-Baghdadi",
            rating=5,
            title="Perfect Mountain Getaway!",
            comment="Amazing villa with breathtaking views! Exactly as described.",
            created_at="2024-06-15T10:30:00+00:00",
            updated_at="2024-06-15T10:30:00+00:00",
        ),
        Review(
            id="review-2",
            house_id="house-1",
            user_id="user-sample-2",
            user_name="Fatima Hassan",
            rating=4,
            title="Great Family House",
            comment="Very comfortable house with all amenities. WiFi was a bit slow.",
            created_at="2024-06-20T14:15:00+00:00",
            updated_at="2024-06-20T14:15:00+00:00",
        ),
        Review(
            id="review-3",
            house_id="house-2",
            user_id="user-sample-3",
            user_name="Layla Mohammed",
            rating=4,
            title="Cozy and Authentic",
            comment="Loved the traditional Kurdish architecture!",
            created_at="2024-06-25T16:20:00+00:00",
            updated_at="2024-06-25T16:20:00+00:00",
        ),
    ]


def sample_bookings() -> list[Booking]:
    """Reservas de muestra para probar el calendario de disponibilidad."""
    return [
        Booking(
            id="booking-1",
            house_id="house-1",
            user_id="user-1",
            check_in=date(2024, 7, 15),
            check_out=date(2024, 7, 20),
            guests=4,
            total_price=900,
            status="confirmed",
        ),
        Booking(
            id="booking-2",
            house_id="house-1",
            user_id="user-2",
            check_in=date(2024, 7, 25),
            check_out=date(2024, 7, 30),
            guests=6,
            total_price=900,
            status="confirmed",
        ),
        Booking(
            id="booking-3",
            house_id="house-2",
            user_id="user-3",
            check_in=date(2024, 7, 10),
            check_out=date(2024, 7, 15),
            guests=3,
            total_price=600,
            status="confirmed",
        ),
        Booking(
            id="booking-4",
            house_id="house-1",
            user_id="user-4",
            check_in=date(2024, 8, 5),
            check_out=date(2024, 8, 12),
            guests=8,
            total_price=1260,
            status="pending",
        ),
    ]
