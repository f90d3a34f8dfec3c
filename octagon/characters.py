"""Super Smash Bros. Ultimate character names, nicknames and start.gg ids."""

from __future__ import annotations

import re
from typing import Optional

# One character per line: start.gg id, then its full name and nicknames.
_TABLE = """
1271 bayonetta, bayo
1272 bowser jr, jr, bj
1273 bowser
1274 captain falcon, falcon
1275 cloud
1276 corrin
1277 daisy
1278 dark pit
1279 diddy kong, diddy
1280 donkey kong, dk
1282 dr mario, doc
1283 duck hunt
1285 falco
1286 fox
1287 ganondorf, ganon
1289 greninja
1290 ice climbers, icies
1291 ike
1292 inkling
1293 jigglypuff, jiggs, puff
1294 king dedede, ddd
1295 kirby
1296 link
1297 little mac, mac
1298 lucario
1299 lucas
1300 lucina
1301 luigi
1302 mario
1304 marth
1305 mega man
1307 meta knight, mk
1310 mewtwo
1311 mii brawler, brawler
1313 ness
1314 olimar
1315 pacman
1316 palutena, palu
1317 peach
1318 pichu
1319 pikachu, pika
1320 pit
1321 pokemon trainer, pt
1322 ridley
1323 rob
1324 robin
1325 rosalina, rosa
1326 roy
1327 ryu
1328 samus
1329 sheik
1330 shulk
1331 snake
1332 sonic
1333 toon link, tink
1334 villager
1335 wario
1336 wii fit trainer, wiifit, wft
1337 wolf
1338 yoshi
1339 young link, yink
1340 zelda
1341 zero suit samus, zss
1405 mr game and watch, gnw, game&watch
1406 incineroar, incin
1407 king k rool, krool
1408 dark samus
1409 chrom
1410 ken
1411 simon belmont
1412 richter
1413 isabelle
1414 mii swordfighter, swordfighter
1415 mii gunner, gunner
1441 piranha plant, plant, pp
1453 joker
1526 hero
1530 banjo kazooie, banjo
1532 terry
1539 byleth
1746 random
1747 min min
1766 steve
1777 sephiroth, seph
1795 pyra mythra, pyra, pythra, mythra, aegis
1846 kazuya
1897 sora
"""


def _parse_table(table: str) -> dict[str, int]:
    names: dict[str, int] = {}
    for line in filter(None, map(str.strip, table.splitlines())):
        ident, _, rest = line.partition(" ")
        for alias in rest.split(","):
            names[alias.strip()] = int(ident)
    return names


CHARACTERS: dict[str, int] = _parse_table(_TABLE)

_PUNCTUATION = re.compile(r"[^\w\s]", re.ASCII)


def normalize(name: str) -> str:
    """Lower-case, drop punctuation and trim surrounding whitespace."""
    return _PUNCTUATION.sub("", name.lower()).strip()


def levenshtein(a: str, b: str) -> int:
    """Edit distance between two strings."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (ca != cb),
                )
            )
        previous = current
    return previous[-1]


def get_character_id(name: str) -> Optional[int]:
    """Return the id of the closest-named character, or None if nothing is close."""
    normalized = normalize(name)
    if not normalized:
        return None

    best_match: Optional[str] = None
    best_distance = len(normalized) + 1
    for char_name in CHARACTERS:
        distance = levenshtein(normalized, normalize(char_name))
        if distance < best_distance:
            best_distance = distance
            best_match = char_name

    return CHARACTERS[best_match] if best_match is not None else None