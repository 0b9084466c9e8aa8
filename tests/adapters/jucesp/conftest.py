from __future__ import annotations

import pytest

RESULT_PAGE = """
<html>
  <body>
    <form id="ctl00">
      <table id="resultado-busca" class="grid">
        <tr>
          <th>CNPJ</th><th>Empresa</th><th>Nome fantasia</th>
          <th>Data</th><th>Municipio</th><th>Situacao</th>
        </tr>
        <tr>
          <td>12.345.678/0001-90</td>
          <td>PADARIA CENTRAL LTDA</td>
          <td>Padaria   Central</td>
          <td>02/05/2024</td>
          <td>SAO PAULO</td>
          <td>ATIVA</td>
        </tr>
        <tr>
          <td>98.765.432/0001-10</td>
          <td>OFICINA AZUL ME</td>
          <td></td>
          <td>02/05/2024</td>
          <td>CAMPINAS</td>
          <td>ATIVA</td>
        </tr>
        <tr>
          <td>--</td>
          <td>SEM CNPJ LTDA</td>
          <td></td>
          <td>02/05/2024</td>
          <td>SANTOS</td>
          <td>ATIVA</td>
        </tr>
        <tr>
          <td>11.222.333/0001-81</td>
          <td>DATA RUIM LTDA</td>
          <td></td>
          <td>ontem</td>
          <td>SANTOS</td>
          <td>ATIVA</td>
        </tr>
      </table>
    </form>
  </body>
</html>
"""


@pytest.fixture
def result_page() -> str:
    return RESULT_PAGE
