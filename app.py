"""
Take Rate & Lender Yield Modeler
Interactive tool for modeling platform take rates and lender product economics
"""

import logging

import streamlit as st
import plotly.graph_objects as go

from settings import settings
from calculator_state import (
    LenderConfig,
    TakeRateConfig,
    add_product,
    remove_product,
    set_baked_fee,
    set_funded_volume,
    set_markup_rate,
    set_planned_ask,
    set_product_apr,
    set_product_base_mdr,
    set_product_funding_cost,
    set_product_loss_rate,
    set_product_name,
    set_product_promo_mdr,
    set_product_servicing_cost,
    set_product_share,
    set_product_tier,
    set_product_type,
    set_usage_share,
)
from input_parsing import parse_number
from optimization_advisor import suggest_optimizations
from take_rate_engine import (
    VOLUME_CHECKPOINTS,
    calculate_take_rate_summary,
    project_revenue_checkpoints,
)
from tiers import TIER_DEFINITIONS, FeasibilityLabel, MarkupBucketId, ProductType, TierLabel
from yield_share_engine import (
    calculate_product_yield,
    calculate_tier_summaries,
    products_frame,
    tier_summaries_frame,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

# Palette
PURPLE_DARK = '#3B2179'
PURPLE_SOFT = '#B5A3F8'
ORANGE = '#F96C53'
MAGENTA = '#A516C7'
PURPLE_LIGHT = '#CFD5FE'

FEASIBILITY_COLORS = {
    FeasibilityLabel.HEALTHY: PURPLE_SOFT,
    FeasibilityLabel.TIGHT: ORANGE,
    FeasibilityLabel.NOT_SUSTAINABLE: MAGENTA,
}


# Page configuration
st.set_page_config(
    page_title=settings.APP_TITLE,
    page_icon="📊",
    layout="wide"
)

# Header
st.title(settings.APP_TITLE)

# Initialize session state with default configurations
if 'take_rate_config' not in st.session_state:
    st.session_state.take_rate_config = TakeRateConfig(funded_volume=settings.DEFAULT_FUNDED_VOLUME)
if 'lender_config' not in st.session_state:
    st.session_state.lender_config = LenderConfig()


def format_currency(value: float) -> str:
    return f"${value:,.0f}"


page1, page2 = st.tabs(["Economics Config", "Lender Yield & Share"])

# ---------------------------------------------------------------------------
# Page 1: Economics Config
# ---------------------------------------------------------------------------
with page1:
    st.info(
        "Model baked fee and merchant markup strategies across the 4 FICO tiers and see the "
        "impact on total blended take rate and expected revenue. Typical healthy ranges: baked "
        "fees from 0–0.5% (super prime) up to 2–5% (higher risk); merchant markups usually 1–4%."
    )

    take_rate_config = st.session_state.take_rate_config

    left, right = st.columns([2, 1])

    with left:
        st.subheader("Baked Fee by Tier")
        for tier in take_rate_config.tiers:
            fee = st.number_input(
                f"{tier.label.value} – Baked Fee (%)",
                min_value=0.0,
                value=float(tier.baked_fee_pct),
                step=0.05,
                format="%.2f",
                key=f"baked_fee_{tier.id}"
            )
            take_rate_config = set_baked_fee(take_rate_config, tier.id, fee)

        suggested = ", ".join(
            f"{definition.suggested_baked_fee_pct:.2f}% ({definition.short_name})"
            for definition in TIER_DEFINITIONS
        )
        st.caption(f"Suggested baked fees (for reference): {suggested}. This serves as a soft guideline.")

        st.subheader(
            "Markup Strategy",
            help="Markup tiers are additional dealer fees charged to merchants on top of lender pricing. "
                 "They do not affect lender yield directly; they are the platform's margin lever."
        )

        rate_cols = st.columns(3)
        for col, bucket in zip(rate_cols, MarkupBucketId):
            with col:
                rate = st.number_input(
                    f"Markup Tier {bucket.value} (%)",
                    min_value=0.0,
                    value=float(take_rate_config.markup_buckets[bucket].markup_rate_pct),
                    step=0.05,
                    format="%.2f",
                    key=f"markup_rate_{bucket.value}"
                )
                take_rate_config = set_markup_rate(take_rate_config, bucket, rate)

        share_cols = st.columns(3)
        for col, bucket in zip(share_cols, MarkupBucketId):
            with col:
                share = st.number_input(
                    f"Percent using Tier {bucket.value}",
                    min_value=0.0,
                    value=float(take_rate_config.markup_buckets[bucket].usage_share_pct),
                    step=1.0,
                    format="%.0f",
                    key=f"markup_share_{bucket.value}"
                )
                take_rate_config = set_usage_share(take_rate_config, bucket, share)

    with right:
        st.subheader("Volume and Revenue Simulation")
        volume_text = st.text_input(
            "Funded Volume ($)",
            value=f"{take_rate_config.funded_volume:,.0f}",
            key="funded_volume",
            help="Accepts thousands separators, e.g. 50,000,000"
        )
        take_rate_config = set_funded_volume(take_rate_config, volume_text)

    st.session_state.take_rate_config = take_rate_config
    summary = calculate_take_rate_summary(take_rate_config)

    with left:
        st.markdown(f"**Total Share:** {summary['total_markup_share']:g} %")
        if not summary['shares_valid']:
            st.warning("Markup shares must sum to 100% for an accurate blended rate.", icon="⚠️")
        st.metric("Blended Markup Take Rate", f"{summary['blended_markup_rate']:.2f} %")

    with right:
        st.metric("Expected Gross Revenue", format_currency(summary['expected_gross_revenue']))
        st.metric("Revenue per 1 Million", format_currency(summary['revenue_per_million']))

        st.subheader("Blended Take Rate Summary")
        st.metric("Average Baked Fee", f"{summary['avg_baked_fee']:.2f} %")
        st.metric("Blended Markup Fee", f"{summary['blended_markup_rate']:.2f} %")
        st.metric("Total Blended Take Rate", f"{summary['total_blended_rate']:.2f} %")

    chart_left, chart_right = st.columns(2)

    with chart_left:
        composition_fig = go.Figure(go.Bar(
            orientation="h",
            y=["Average Baked Fee", "Blended Markup Fee", "Total Take Rate"],
            x=[summary['avg_baked_fee'], summary['blended_markup_rate'], summary['total_blended_rate']],
            marker=dict(color=[PURPLE_DARK, ORANGE, PURPLE_DARK]),
            text=[
                f"{summary['avg_baked_fee']:.2f}% ({summary['baked_fee_share']:.0f}%)",
                f"{summary['blended_markup_rate']:.2f}% ({summary['markup_share']:.0f}%)",
                f"{summary['total_blended_rate']:.2f}%",
            ],
            textposition="outside",
            hovertemplate='<b>%{y}</b><br>%{x:.2f}%<extra></extra>'
        ))
        composition_fig.update_layout(
            title="Take Rate Composition",
            xaxis_title="Rate (%)",
            yaxis=dict(autorange="reversed"),
            height=320,
            margin=dict(t=60, b=40, l=40, r=40)
        )
        st.plotly_chart(composition_fig, config={'displayModeBar': False}, use_container_width=True)

    with chart_right:
        volumes, revenues = project_revenue_checkpoints(summary['total_blended_rate'], VOLUME_CHECKPOINTS)
        revenue_fig = go.Figure(go.Bar(
            x=[f"{format_currency(volume)} Volume" for volume in volumes],
            y=revenues,
            marker=dict(color=MAGENTA),
            text=[format_currency(revenue) for revenue in revenues],
            textposition="outside",
            hovertemplate='<b>%{x}</b><br>$%{y:,.0f}<extra></extra>'
        ))
        revenue_fig.update_layout(
            title=f"Revenue vs Funded Volume (at {summary['total_blended_rate']:.2f}% Take Rate)",
            yaxis_title="Revenue ($)",
            height=320,
            margin=dict(t=60, b=40, l=40, r=40)
        )
        st.plotly_chart(revenue_fig, config={'displayModeBar': False}, use_container_width=True)

# ---------------------------------------------------------------------------
# Page 2: Lender Yield & Share
# ---------------------------------------------------------------------------
with page2:
    st.info(
        "Configure the lender product mix per tier. Net Yield Before Partner (NYBP) = APR + base MDR "
        "+ promo MDR − funding cost − loss rate − servicing cost. Shares are weights within a tier "
        "and are normalized automatically."
    )

    lender_config = st.session_state.lender_config

    st.subheader("Product Mix")
    tiers = list(TierLabel)
    product_types = list(ProductType)

    for product in lender_config.products:
        with st.expander(
            f"{product.name} · {product.tier.value} · NYBP {calculate_product_yield(product):.2f}%",
            expanded=False
        ):
            name_col, tier_col, type_col, remove_col = st.columns([3, 3, 2, 1])
            with name_col:
                name = st.text_input("Product Name", value=product.name, key=f"name_{product.id}")
            with tier_col:
                tier = st.selectbox(
                    "Tier",
                    options=tiers,
                    index=tiers.index(product.tier),
                    format_func=lambda t: t.value,
                    key=f"tier_{product.id}"
                )
            with type_col:
                product_type = st.selectbox(
                    "Product Type",
                    options=product_types,
                    index=product_types.index(product.product_type),
                    format_func=lambda p: p.value,
                    key=f"type_{product.id}"
                )
            with remove_col:
                st.write("")
                if st.button("Remove", key=f"remove_{product.id}"):
                    st.session_state.lender_config = remove_product(lender_config, product.id)
                    st.rerun()

            lender_config = set_product_name(lender_config, product.id, name)
            lender_config = set_product_tier(lender_config, product.id, tier)
            lender_config = set_product_type(lender_config, product.id, product_type)

            numeric_fields = [
                ("APR (%)", product.apr, set_product_apr, "apr"),
                ("Base MDR (%)", product.base_mdr, set_product_base_mdr, "base_mdr"),
                ("Promo MDR (%)", product.promo_mdr, set_product_promo_mdr, "promo_mdr"),
                ("Funding Cost (%)", product.funding_cost, set_product_funding_cost, "funding_cost"),
                ("Loss Rate (%)", product.loss_rate, set_product_loss_rate, "loss_rate"),
                ("Servicing Cost (%)", product.servicing_cost, set_product_servicing_cost, "servicing_cost"),
                ("Share in Tier (%)", product.share_pct, set_product_share, "share_pct"),
            ]
            field_cols = st.columns(len(numeric_fields))
            for col, (label, current, setter, field_key) in zip(field_cols, numeric_fields):
                with col:
                    value = st.number_input(
                        label,
                        value=float(current),
                        step=0.25,
                        format="%.2f",
                        key=f"{field_key}_{product.id}"
                    )
                    lender_config = setter(lender_config, product.id, value)

    if not lender_config.products:
        st.caption("No products configured. Every tier reports a weighted NYBP of 0.")
    else:
        product_df = products_frame(lender_config.products).drop(columns=['id'])
        product_df.columns = ['Product', 'Tier', 'Type', 'APR', 'Base MDR', 'Promo MDR',
                              'Funding Cost', 'Loss Rate', 'Servicing Cost', 'Share in Tier', 'NYBP']
        for col in product_df.columns[3:]:
            product_df[col] = product_df[col].apply(lambda x: f'{x:.2f}%')
        st.dataframe(product_df, hide_index=True, use_container_width=True)

    if st.button("➕ Add Product"):
        st.session_state.lender_config = add_product(lender_config)
        st.rerun()

    st.markdown("---")
    st.subheader("Planned Ask by Tier")
    ask_cols = st.columns(len(TIER_DEFINITIONS))
    for col, definition in zip(ask_cols, TIER_DEFINITIONS):
        with col:
            ask = st.number_input(
                f"{definition.short_name} Planned Ask (%)",
                value=float(parse_number(lender_config.planned_asks.get(definition.label, 0.0))),
                step=0.05,
                format="%.2f",
                key=f"planned_ask_{definition.id}",
                help=definition.label.value
            )
            lender_config = set_planned_ask(lender_config, definition.label, ask)

    st.session_state.lender_config = lender_config

    tier_summaries = calculate_tier_summaries(
        lender_config.products,
        lender_config.planned_asks,
        TIER_DEFINITIONS
    )

    st.markdown("---")
    st.subheader("Tier Yield Summary")

    table_df = tier_summaries_frame(tier_summaries)
    table_df.columns = ['Tier', 'Products', 'Weighted NYBP', 'Health', 'Shareable Yield',
                        'Safe Ask', 'Stretch Ask', 'Planned Ask', 'Residual After Ask', 'Feasibility']

    pct_cols = ['Weighted NYBP', 'Shareable Yield', 'Safe Ask', 'Stretch Ask',
                'Planned Ask', 'Residual After Ask']
    for col in pct_cols:
        table_df[col] = table_df[col].apply(lambda x: f'{x:.2f}%')

    st.dataframe(table_df, hide_index=True, use_container_width=True)

    # Chart: weighted NYBP per tier with ask bands
    tier_names = [
        next(d.short_name for d in TIER_DEFINITIONS if d.label == s.tier_label)
        for s in tier_summaries
    ]
    yield_fig = go.Figure()
    yield_fig.add_trace(go.Bar(
        x=tier_names,
        y=[s.weighted_nybp for s in tier_summaries],
        name="Weighted NYBP",
        marker=dict(color=[FEASIBILITY_COLORS[s.feasibility_label] for s in tier_summaries]),
        text=[f"{s.weighted_nybp:.2f}%" for s in tier_summaries],
        textposition="outside"
    ))
    yield_fig.add_trace(go.Scatter(
        x=tier_names,
        y=[s.safe_ask for s in tier_summaries],
        mode='markers',
        name="Safe Ask",
        marker=dict(color=PURPLE_SOFT, size=12, symbol='line-ew-open', line=dict(width=3))
    ))
    yield_fig.add_trace(go.Scatter(
        x=tier_names,
        y=[s.stretch_ask for s in tier_summaries],
        mode='markers',
        name="Stretch Ask",
        marker=dict(color=ORANGE, size=12, symbol='line-ew-open', line=dict(width=3))
    ))
    yield_fig.add_trace(go.Scatter(
        x=tier_names,
        y=[s.planned_ask for s in tier_summaries],
        mode='markers',
        name="Planned Ask",
        marker=dict(color=PURPLE_DARK, size=10, symbol='diamond')
    ))
    yield_fig.update_layout(
        title="Weighted NYBP vs Ask Bands by Tier",
        yaxis_title="Yield (%)",
        height=380,
        hovermode='x unified',
        margin=dict(t=60, b=40, l=40, r=40)
    )
    st.plotly_chart(yield_fig, config={'displayModeBar': False}, use_container_width=True)

    st.subheader("Optimization Suggestions")
    suggestion_cols = st.columns(len(tier_summaries))
    for col, tier_summary in zip(suggestion_cols, tier_summaries):
        with col:
            st.markdown(f"**{tier_summary.tier_label.value}**")
            st.caption(f"{tier_summary.health_label.value} · {tier_summary.feasibility_label.value}")
            st.markdown("\n".join(f"- {line}" for line in suggest_optimizations(tier_summary)))

# Footer
st.caption("Take Rate & Lender Yield Modeler v1.0 | Built with Streamlit")
