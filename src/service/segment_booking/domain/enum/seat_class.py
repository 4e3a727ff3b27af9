from enum import StrEnum


class SeatClass(StrEnum):
    EXECUTIVE = 'Executive'
    BUSINESS = 'Business'
    ECONOMY = 'Economy'
