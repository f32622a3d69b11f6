from datetime import datetime

from bcb_poupanca.domain.poupanca.service import PoupancaService
from bcb_poupanca.extractors.bcb_sgs_raw import BcbSgsRawExtractor
from bcb_poupanca.utils.io.http import HTTPConfig, RequestsTransport


def main():
    http = RequestsTransport(HTTPConfig(timeout_sec=60))
    poupanca = PoupancaService()
    poupanca.load(BcbSgsRawExtractor(http))

    print("Últimos 12 meses:")
    for e in poupanca.last_12():
        print(f" - {e.timestamp_start:%m/%Y}: {e.rate_percent:.4f}%")

    print(f"Média mensal (12m): {poupanca.yearly_average():.4f}%")
    print(f"Acumulado (12m): {(poupanca.yearly_accumulated() - 1) * 100:.4f}%")

    de = datetime(2020, 1, 31)
    print(f"R$ 1000,00 desde {de:%d/%m/%Y}: R$ {poupanca.correct(1000, de):.2f}")


if __name__ == "__main__":
    main()
