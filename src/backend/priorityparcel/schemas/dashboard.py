from priorityparcel.schemas.common import ApiModel


class DashboardStats(ApiModel):
    totaal_zendingen: int
    actieve_zendingen: int
    afgeleverd: int
    gemiddelde_leveringstijd: str
    klanttevredenheid: str
