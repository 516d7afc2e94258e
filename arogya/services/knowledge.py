"""Static veterinary guidance shown to patients who keep livestock."""
from urllib.parse import quote

from ..core.config import settings
from ..schemas.veterinary import EmergencyResponse, GuideEntry, GuideSection, KnowledgeResponse

WARNING_SIGNS = [
    GuideEntry(title="Severe bleeding", detail="Wounds that won't stop bleeding"),
    GuideEntry(title="Difficulty breathing", detail="Labored or rapid breathing"),
    GuideEntry(title="Severe diarrhea or vomiting", detail="Continuous for more than 24 hours"),
    GuideEntry(title="Inability to stand", detail="Sudden weakness or collapse"),
    GuideEntry(title="Eye injuries", detail="Any trauma to the eyes"),
    GuideEntry(title="Birthing complications", detail="Prolonged labor or visible distress"),
    GuideEntry(title="Poisoning symptoms", detail="Excessive drooling, tremors, seizures"),
    GuideEntry(title="High fever", detail="Body temperature above 103°F (39.4°C)"),
]

FIRST_AID = [
    "Keep the animal calm and in a safe, quiet area",
    "For bleeding: Apply gentle pressure with clean cloth",
    "For poisoning: Do NOT induce vomiting - call vet immediately",
    "Keep the animal's airway clear",
    "Monitor breathing and heart rate",
    "Note symptoms and time of onset to inform the vet",
]

KNOWLEDGE_SECTIONS = [
    GuideSection(
        title="Initial Vaccinations (Calves)",
        description="Recommended vaccination timeline for cattle",
        entries=[
            GuideEntry(title="1-2 months", detail="FMD (Foot and Mouth Disease) - 1st dose"),
            GuideEntry(title="3-4 months", detail="FMD - 2nd dose"),
            GuideEntry(title="4-6 months", detail="Brucellosis (female calves only)"),
            GuideEntry(title="6 months", detail="Black Quarter (BQ) - 1st dose"),
        ],
    ),
    GuideSection(
        title="Annual Vaccinations (Adult Cattle)",
        entries=[
            GuideEntry(title="Every 6 months", detail="FMD booster"),
            GuideEntry(title="Annually", detail="Hemorrhagic Septicemia (HS)"),
            GuideEntry(title="Annually", detail="Black Quarter (BQ) booster"),
            GuideEntry(title="Pre-monsoon", detail="Anthrax vaccination"),
        ],
    ),
    GuideSection(
        title="Foot and Mouth Disease (FMD)",
        description="Recognize these symptoms early",
        entries=[
            GuideEntry(title="High fever (104-106°F)"),
            GuideEntry(title="Blisters on mouth, tongue, and hooves"),
            GuideEntry(title="Excessive salivation"),
            GuideEntry(title="Lameness and reluctance to move"),
            GuideEntry(title="Reduced milk production"),
        ],
    ),
    GuideSection(
        title="Mastitis",
        entries=[
            GuideEntry(title="Swollen, hot, or hard udder"),
            GuideEntry(title="Abnormal milk (clots, blood, watery)"),
            GuideEntry(title="Reduced milk yield"),
            GuideEntry(title="Fever and loss of appetite"),
            GuideEntry(title="Pain when touching udder"),
        ],
    ),
    GuideSection(
        title="Digestive Problems",
        entries=[
            GuideEntry(title="Bloating or distended abdomen"),
            GuideEntry(title="Diarrhea or constipation"),
            GuideEntry(title="Loss of appetite"),
            GuideEntry(title="Reduced rumination"),
            GuideEntry(title="Dehydration"),
        ],
    ),
    GuideSection(
        title="Respiratory Issues",
        entries=[
            GuideEntry(title="Coughing or difficulty breathing"),
            GuideEntry(title="Nasal discharge"),
            GuideEntry(title="Fever"),
            GuideEntry(title="Reduced activity and appetite"),
            GuideEntry(title="Rapid breathing"),
        ],
    ),
    GuideSection(
        title="Daily Fodder Requirements (per cow)",
        description="Balanced nutrition for optimal milk production",
        entries=[
            GuideEntry(title="Green Fodder", detail="15-20 kg (Berseem, Maize, Jowar)"),
            GuideEntry(title="Dry Fodder", detail="3-4 kg (Wheat/Rice straw)"),
            GuideEntry(title="Concentrate Mix", detail="1-2 kg (based on milk production)"),
            GuideEntry(title="Water", detail="30-40 liters (clean, fresh water)"),
        ],
    ),
    GuideSection(
        title="Concentrate Mix Formula",
        entries=[
            GuideEntry(title="Maize/Wheat", detail="30-35%"),
            GuideEntry(title="De-oiled Rice Bran", detail="20-25%"),
            GuideEntry(title="Cottonseed/Groundnut Cake", detail="20-25%"),
            GuideEntry(title="Wheat Bran", detail="10-15%"),
            GuideEntry(title="Mineral Mixture", detail="2%"),
            GuideEntry(title="Salt", detail="1%"),
        ],
    ),
    GuideSection(
        title="Feeding Tips",
        entries=[
            GuideEntry(title="Feed at regular times (morning and evening)"),
            GuideEntry(title="Increase concentrate for high-yielding cows"),
            GuideEntry(title="Ensure clean, mold-free fodder"),
            GuideEntry(title="Provide minerals and vitamin supplements"),
            GuideEntry(title="Adjust feed during pregnancy and lactation"),
        ],
    ),
    GuideSection(
        title="When to Call a Vet",
        description="Don't delay - early intervention saves lives",
        entries=[
            GuideEntry(title="Sudden drop in milk production (more than 20%)"),
            GuideEntry(title="High fever (above 103°F / 39.4°C)"),
            GuideEntry(title="Persistent diarrhea or constipation (more than 24 hours)"),
            GuideEntry(title="Breathing difficulties or rapid breathing"),
            GuideEntry(title="Severe bloating or distended abdomen"),
            GuideEntry(title="Wounds or injuries that need treatment"),
            GuideEntry(title="Birthing complications or retained placenta"),
            GuideEntry(title="Abnormal discharge from any body opening"),
            GuideEntry(title="Sudden behavioral changes or lethargy"),
            GuideEntry(title="Visible pain or discomfort"),
        ],
    ),
]

FOOTER = (
    "Prevention is better than cure: Regular health check-ups, proper nutrition, "
    "clean housing, and timely vaccinations can prevent most diseases."
)


def emergency() -> EmergencyResponse:
    whatsapp = None
    if settings.EMERGENCY_WHATSAPP:
        whatsapp = (
            f"https://wa.me/{settings.EMERGENCY_WHATSAPP}"
            f"?text={quote('Emergency Vet Help Needed')}"
        )
    return EmergencyResponse(
        helpline=settings.EMERGENCY_HELPLINE,
        call_link=f"tel:{settings.EMERGENCY_HELPLINE}",
        whatsapp_link=whatsapp,
        warning_signs=WARNING_SIGNS,
        first_aid=FIRST_AID,
    )


def knowledge() -> KnowledgeResponse:
    return KnowledgeResponse(sections=KNOWLEDGE_SECTIONS, footer=FOOTER)
