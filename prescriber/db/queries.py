"""
SQL for the FDB reference dataset.

Scalar keys are bound as ``$n`` parameters. Variable-length key lists are
bound as integer arrays and matched with ``= ANY(...)``; nothing here is
ever built by string concatenation.
"""

FOOD_INTERACTIONS = """
    SELECT DISTINCT t2.RESULT AS food_result
    FROM RDFIMGC0 AS t1
    JOIN RDFIMMA0 AS t2 ON (t1.FDCDE = t2.FDCDE)
    WHERE t1.GCN_SEQNO = $1
    ORDER BY food_result
"""

ALLERGY_INTERACTIONS = """
    SELECT DISTINCT t2.DAM_ALRGN_GRP AS allergen_group,
           t2.DAM_ALRGN_GRP_DESC AS allergen_description
    FROM RDAMGHC0 AS t1
    JOIN RDAMAGD1 AS t2 ON (t1.DAM_ALRGN_GRP = t2.DAM_ALRGN_GRP)
    JOIN RHICL1 AS t3 ON (t1.HIC_SEQN = t3.HIC_SEQN)
    WHERE t3.HICL_SEQNO = $1
      AND t1.DAM_ALRGN_GRP = ANY($2::int[])
    ORDER BY allergen_group
"""

# Rows come back as (target_id, effect_text) ascending by target_id; the
# merge-join depends on that order. Interactions whose severity level is not
# in RADIMSL1 are excluded.
DRUG_INTERACTIONS = """
    SELECT DISTINCT table2.DIN AS target_id, f0.ADI_EFFTXT AS effect_text
    FROM (
        SELECT DISTINCT gcn.HICL_SEQNO AS hicl1, c4.DDI_CODEX AS codex1,
               a5.DDI_MONOX AS monox1
        FROM RGCNSEQ4 AS gcn
        JOIN RADIMGC4 AS c4 ON (gcn.GCN_SEQNO = c4.GCN_SEQNO)
        JOIN RADIMMA5 AS a5 ON (c4.DDI_CODEX = a5.DDI_CODEX)
        WHERE gcn.HICL_SEQNO = $1
    ) AS table1
    CROSS JOIN (
        SELECT DISTINCT gcn.HICL_SEQNO AS hicl2, ric.DIN, c4.DDI_CODEX AS codex2,
               a5.DDI_MONOX AS monox2
        FROM RGCNSEQ4 AS gcn
        LEFT JOIN RICAIDC1 AS ric ON (ric.GCN_SEQNO = gcn.GCN_SEQNO)
        LEFT JOIN RADIMGC4 AS c4 ON (gcn.GCN_SEQNO = c4.GCN_SEQNO)
        LEFT JOIN RADIMMA5 AS a5 ON (c4.DDI_CODEX = a5.DDI_CODEX)
        WHERE gcn.HICL_SEQNO = ANY($2::int[])
          AND ric.DIN = ANY($3::int[])
    ) AS table2
    JOIN RADIMIE4 AS e4 ON (table1.codex1 = e4.DDI_CODEX)
    JOIN RADIMEF0 AS f0 ON (e4.ADI_EFFTC = f0.ADI_EFFTC)
    JOIN RADIMSL1 AS l1 ON (e4.DDI_SL = l1.DDI_SL)
    WHERE table1.monox1 = table2.monox2
      AND table1.codex1 != table2.codex2
    ORDER BY target_id, effect_text
"""

DRUG_SEARCH = """
    SELECT t1.DIN AS drug_id, t1.LN AS label_name,
           t3.HICL_SEQNO AS ingredient_id, t1.GCN_SEQNO AS gcn_seqno
    FROM RICAIDC1 AS t1
    JOIN RLBLRCA1 AS t2 ON (t1.ILBLRID = t2.ILBLRID)
    JOIN RGCNSEQ4 AS t3 ON (t1.GCN_SEQNO = t3.GCN_SEQNO)
    WHERE t1.LN LIKE $1 ESCAPE '\\'
    ORDER BY t1.LN, t1.DIN
"""

DRUG_SEARCH_PAGE = DRUG_SEARCH + """
    OFFSET $2 LIMIT $3
"""

ALLERGY_SEARCH = """
    SELECT DAM_ALRGN_GRP AS allergen_group,
           DAM_ALRGN_GRP_DESC AS allergen_description
    FROM RDAMAGD1
    WHERE DAM_ALRGN_GRP_DESC LIKE $1 ESCAPE '\\'
    ORDER BY DAM_ALRGN_GRP_DESC
"""
