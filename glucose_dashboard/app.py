"""
Glucose Dashboard Streamlit App

Interactive dashboard for a glucose log kept in a published spreadsheet.
Tabs: overview, patterns, calendar, records and report.
"""

import calendar
import logging
from datetime import datetime, timedelta

import pandas as pd
import requests
import streamlit as st

from glucose_dashboard.config import AnalysisConfig, load_config
from glucose_dashboard.loaders import SheetCsvLoader
from glucose_dashboard.analyzers import (
    GlucoseAnalyzer,
    InsightGenerator,
    analyze_patterns,
    generate_recommendations,
)
from glucose_dashboard.analyzers.recommendations import format_hours
from glucose_dashboard.reports import (
    ReportGenerator,
    default_export_filename,
    export_pattern_report_excel,
    export_readings_csv,
    readings_to_export_frame,
)
from glucose_dashboard.reports.generator import TREND_LABELS
from glucose_dashboard.utils.categories import classify_glucose, WEEKDAY_ABBREVIATIONS
from glucose_dashboard.utils.colors import (
    STATUS_COLORS,
    STATUS_EMOJI,
    RECOMMENDATION_COLORS,
)
from glucose_dashboard.visualizers import PlotlyVisualizer

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)


# =============================================================================
# Page Config
# =============================================================================

st.set_page_config(
    page_title="Controle Glicêmico",
    page_icon="🩸",
    layout="wide",
    initial_sidebar_state="expanded"
)

# =============================================================================
# Custom CSS
# =============================================================================

st.markdown("""
<style>
    @import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap');

    html, body, [class*="css"] {
        font-family: 'Inter', -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
    }

    .block-container {
        padding-top: 2rem;
        padding-bottom: 2rem;
    }

    div[data-testid="stMetricValue"] {
        font-size: 1.75rem;
        font-weight: 700;
    }

    div[data-testid="stMetricLabel"] {
        font-size: 0.8rem;
        font-weight: 500;
        text-transform: uppercase;
        letter-spacing: 0.03em;
    }

    .stTabs [data-baseweb="tab"] {
        height: 40px;
        padding: 0 20px;
        border-radius: 8px;
        font-weight: 500;
    }

    .card {
        padding: 12px 16px;
        border-radius: 8px;
        margin-bottom: 12px;
        border-left: 4px solid;
        background: rgba(128, 128, 128, 0.06);
    }

    .calendar-day {
        padding: 6px;
        border-radius: 6px;
        text-align: center;
        font-size: 0.8rem;
        min-height: 56px;
    }
</style>
""", unsafe_allow_html=True)

RANGE_OPTIONS = {
    '7 dias': 7,
    '30 dias': 30,
    'Todos': None,
}

INSIGHT_COLORS = {
    'warning': '#f59e0b',
    'info': '#6366f1',
    'success': '#22c55e',
}


# =============================================================================
# Session State Initialization
# =============================================================================

def init_session_state():
    """Initialize session state variables."""
    if 'config' not in st.session_state:
        st.session_state.config = load_config()
    if 'readings' not in st.session_state:
        st.session_state.readings = None
    if 'loaded_at' not in st.session_state:
        st.session_state.loaded_at = None


init_session_state()


def load_readings(url=None, uploaded=None):
    """Load readings into session state, reporting failures in the UI."""
    config = st.session_state.config
    try:
        if uploaded is not None:
            loader = SheetCsvLoader(text=uploaded.getvalue().decode('utf-8-sig'), config=config)
        else:
            loader = SheetCsvLoader(url=url, config=config)
        readings = loader.load()
    except (ValueError, requests.RequestException) as e:
        logger.error("Failed to load spreadsheet: %s", e)
        st.error(f"Erro ao carregar dados: {e}")
        return

    st.session_state.readings = readings
    st.session_state.loaded_at = datetime.now()
    if loader.skipped_rows:
        st.warning(f"{loader.skipped_rows} linhas ignoradas por dados inválidos")
    st.success(f"{loader.get_readings_count():,} registros carregados")


def filter_by_range(readings, days, now):
    """Keep readings from the last ``days`` days; None keeps everything."""
    if days is None:
        return list(readings)
    start = (now - timedelta(days=days)).date()
    return [r for r in readings if r.day >= start]


# =============================================================================
# Sidebar - Configuration
# =============================================================================

def render_sidebar():
    """Render sidebar with data source and configuration."""
    with st.sidebar:
        st.title("🩸 Controle Glicêmico")

        config = st.session_state.config

        st.subheader("Fonte de dados")
        url = st.text_input(
            "URL da planilha (CSV publicado)",
            value=config.source.csv_url or '',
        )
        uploaded = st.file_uploader("Ou envie um CSV", type=['csv'], key='csv_upload')

        if st.button("🔄 Atualizar dados", use_container_width=True):
            load_readings(url=url or None, uploaded=uploaded)
        elif st.session_state.readings is None and (uploaded is not None or config.source.csv_url):
            load_readings(url=url or None, uploaded=uploaded)

        if st.session_state.loaded_at is not None:
            st.caption(f"Atualizado em {st.session_state.loaded_at.strftime('%d/%m/%Y %H:%M')}")

        st.divider()

        st.subheader("⚙️ Configurações")

        labels = list(RANGE_OPTIONS)
        default_days = config.visualization.default_range_days
        default_index = next(
            (i for i, label in enumerate(labels) if RANGE_OPTIONS[label] == default_days),
            len(labels) - 1,
        )
        range_label = st.radio("Período", labels, index=default_index, horizontal=True)

        smoothing = st.slider("Janela da média móvel", 1, 20, config.visualization.rolling_window)

        with st.expander("Limites glicêmicos"):
            st.caption("Glicemia (mg/dL)")
            config.glucose.low = st.number_input(
                "Hipoglicemia abaixo de",
                value=int(config.glucose.low),
                min_value=50, max_value=90
            )
            config.glucose.target_low = config.glucose.low
            config.glucose.target_high = st.number_input(
                "Limite superior do alvo",
                value=int(config.glucose.target_high),
                min_value=120, max_value=250
            )
            config.glucose.normal_high = st.number_input(
                "Limite normal",
                value=int(config.glucose.normal_high),
                min_value=90, max_value=180
            )

            st.caption("Análise")
            config.analysis.cv_target = st.number_input(
                "Meta de CV (%)",
                value=float(config.analysis.cv_target),
                min_value=20.0, max_value=50.0
            )

            if st.button("Restaurar padrões"):
                st.session_state.config = AnalysisConfig()
                st.rerun()

        return RANGE_OPTIONS[range_label], smoothing


# =============================================================================
# Main Content
# =============================================================================

def render_main():
    """Render main dashboard content."""
    days, smoothing = render_sidebar()

    all_readings = st.session_state.readings
    config = st.session_state.config

    if all_readings is None:
        st.info("👈 Informe a URL da planilha ou envie um CSV para começar")

        with st.expander("ℹ️ Sobre este painel"):
            st.markdown("""
            Este painel analisa registros de glicemia capilar mantidos em uma planilha.

            **Colunas esperadas:** Data (MM/DD/AAAA), Hora (HH:MM), Período,
            Glicemia (mg/dL) e, opcionalmente, Observações.
            """)
        return

    now = datetime.now()
    readings = filter_by_range(all_readings, days, now)

    if not readings:
        st.warning("Nenhum registro no período selecionado")
        return

    stats = GlucoseAnalyzer(readings, config).stats
    patterns = analyze_patterns(readings, config, now=now)
    recommendations = generate_recommendations(readings, stats, patterns, config)
    insights = InsightGenerator(readings, config, now=now)

    viz = PlotlyVisualizer(config)

    tabs = st.tabs(["📊 Visão geral", "📈 Padrões", "📅 Calendário", "📋 Registros", "📄 Relatório"])

    with tabs[0]:
        render_overview(readings, stats, patterns, recommendations, insights, viz, smoothing)

    with tabs[1]:
        render_patterns(patterns, insights, viz)

    with tabs[2]:
        render_calendar(insights, config)

    with tabs[3]:
        render_records(readings, config)

    with tabs[4]:
        render_report(stats, patterns, recommendations, insights, config, now)


def render_overview(readings, stats, patterns, recommendations, insights, viz, smoothing):
    """Render overview tab: key metrics, charts, insights and recommendations."""
    cv_target = st.session_state.config.analysis.cv_target

    col1, col2, col3, col4, col5 = st.columns(5)
    with col1:
        st.metric("Média", f"{stats.average:.0f} mg/dL")
    with col2:
        st.metric("Tempo no alvo", f"{stats.time_in_range.target:.1f}%")
    with col3:
        cv_delta = "✓ Meta" if stats.coefficient_of_variation <= cv_target else "↑ Acima da meta"
        st.metric("CV", f"{stats.coefficient_of_variation:.1f}%", cv_delta, delta_color="off")
    with col4:
        st.metric("Score de controle", f"{stats.control_score:.0f}/100")
    with col5:
        st.metric("Registros", f"{stats.readings_count:,}")

    st.plotly_chart(viz.create_time_series(readings, smoothing=smoothing), use_container_width=True)

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(viz.create_time_in_range_chart(stats), use_container_width=True)
        st.caption(
            f"Tendência geral: {TREND_LABELS[patterns.trends.overall]} · "
            f"Última semana: {TREND_LABELS[patterns.trends.recent_week]}"
        )
    with col2:
        st.plotly_chart(viz.create_status_distribution_chart(readings), use_container_width=True)

    col1, col2 = st.columns(2)
    with col1:
        st.subheader("💡 Insights")
        cards = insights.generate_insights()
        if not cards:
            st.caption(f"Sem registros nos últimos {st.session_state.config.report.insight_window_days} dias")
        for insight in cards:
            st.markdown(
                f"<div class='card' style='border-color:{INSIGHT_COLORS[insight.kind]}'>"
                f"<strong>{insight.title}</strong><br>{insight.description}</div>",
                unsafe_allow_html=True,
            )
    with col2:
        st.subheader("🎯 Recomendações")
        if not recommendations:
            st.caption("Nenhuma recomendação no momento")
        for recommendation in recommendations:
            st.markdown(
                f"<div class='card' style='border-color:{RECOMMENDATION_COLORS[recommendation.type]}'>"
                f"<strong>{recommendation.title}</strong><br>{recommendation.description}</div>",
                unsafe_allow_html=True,
            )


def render_patterns(patterns, insights, viz):
    """Render hourly, weekday and heatmap patterns."""
    st.subheader("📈 Padrões")

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(viz.create_hourly_pattern_chart(patterns), use_container_width=True)
        st.caption(
            f"Picos: {format_hours(patterns.peak_hours) or 'nenhum'} · "
            f"Baixas: {format_hours(patterns.low_hours) or 'nenhuma'}"
        )
    with col2:
        st.plotly_chart(viz.create_weekday_pattern_chart(patterns), use_container_width=True)

    means, counts = insights.heatmap_grid()
    st.plotly_chart(viz.create_heatmap(means, counts), use_container_width=True)
    legend = " ".join(
        f"<span style='color:{color}'>■</span> {label}" for label, color in viz.create_heatmap_legend()
    )
    st.markdown(legend, unsafe_allow_html=True)

    st.markdown("**Por período do dia**")
    cols = st.columns(3)
    for col, summary in zip(cols, insights.day_part_stats()):
        with col:
            if summary.average is None:
                st.metric(summary.day_part.capitalize(), "-")
                st.caption("Sem dados")
            else:
                st.metric(summary.day_part.capitalize(), f"{summary.average:.0f} mg/dL")
                st.caption(
                    f"{summary.count} leituras · mín {summary.minimum:.0f} · máx {summary.maximum:.0f}"
                )


def render_calendar(insights, config):
    """Render a month grid with the daily average colored by status."""
    st.subheader("📅 Calendário")

    metrics = {m.date: m for m in insights.daily_metrics()}
    if not metrics:
        st.info("Sem registros")
        return

    months = sorted({(day.year, day.month) for day in metrics}, reverse=True)
    year, month = st.selectbox(
        "Mês",
        months,
        format_func=lambda ym: f"{ym[1]:02d}/{ym[0]}",
    )

    cols = st.columns(7)
    for col, name in zip(cols, WEEKDAY_ABBREVIATIONS):
        col.markdown(f"**{name}**")

    # Sunday-first weeks to match the weekday numbering
    for week in calendar.Calendar(firstweekday=6).monthdatescalendar(year, month):
        cols = st.columns(7)
        for col, day in zip(cols, week):
            day_metrics = metrics.get(day)
            if day.month != month:
                col.markdown("<div class='calendar-day'></div>", unsafe_allow_html=True)
            elif day_metrics is None:
                col.markdown(
                    f"<div class='calendar-day'>{day.day}</div>",
                    unsafe_allow_html=True,
                )
            else:
                color = STATUS_COLORS[day_metrics.status]
                col.markdown(
                    f"<div class='calendar-day' style='background:{color}22;border:1px solid {color}'>"
                    f"<strong>{day.day}</strong><br>{day_metrics.average:.0f}"
                    f"<br><small>{day_metrics.count}x</small></div>",
                    unsafe_allow_html=True,
                )

    month_days = [m for m in metrics.values() if m.date.year == year and m.date.month == month]
    if month_days:
        frame = pd.DataFrame([m.to_dict() for m in month_days])
        st.dataframe(frame, use_container_width=True, hide_index=True)


def render_records(readings, config):
    """Render the records table and CSV download."""
    st.subheader("📋 Registros")

    newest_first = sorted(readings, key=lambda r: r.timestamp, reverse=True)
    frame = readings_to_export_frame(newest_first, config)
    frame['Status'] = [
        f"{STATUS_EMOJI[classify_glucose(r.glucose, config.glucose)]} {status}"
        for r, status in zip(newest_first, frame['Status'])
    ]
    st.dataframe(frame, use_container_width=True, hide_index=True)

    st.download_button(
        "📥 Exportar CSV",
        export_readings_csv(newest_first, config=config),
        file_name=default_export_filename(),
        mime="text/csv"
    )


def render_report(stats, patterns, recommendations, insights, config, now):
    """Render the pattern report and downloads."""
    st.subheader("📄 Relatório de padrões")

    report = insights.build_pattern_report()

    col1, col2 = st.columns(2)
    with col1:
        st.markdown("**Horários com mais registros**")
        st.dataframe(
            pd.DataFrame(
                [[h.label, round(h.average, 1), h.count] for h in report.peak_hours],
                columns=['Horário', 'Média (mg/dL)', 'Quantidade'],
            ),
            use_container_width=True, hide_index=True,
        )
        st.markdown("**Dias da semana**")
        st.dataframe(
            pd.DataFrame(
                [[d.label, round(d.average, 1), d.count] for d in report.peak_days],
                columns=['Dia', 'Média (mg/dL)', 'Quantidade'],
            ),
            use_container_width=True, hide_index=True,
        )
    with col2:
        st.markdown("**Refeições**")
        mcol1, mcol2 = st.columns(2)
        with mcol1:
            st.metric("Antes", f"{report.before_meals.average:.0f} mg/dL")
            st.caption(f"{report.before_meals.count} leituras")
        with mcol2:
            st.metric("Após", f"{report.after_meals.average:.0f} mg/dL")
            st.caption(f"{report.after_meals.count} leituras")

        if report.weekly_trends:
            st.markdown("**Tendências semanais**")
            st.dataframe(
                pd.DataFrame(
                    [[w.label, round(w.average, 1), w.count] for w in report.weekly_trends],
                    columns=['Semana', 'Média (mg/dL)', 'Quantidade'],
                ),
                use_container_width=True, hide_index=True,
            )

    generator = ReportGenerator(config, now=now)
    text_report = generator.generate_text_report(stats, patterns, recommendations)

    with st.expander("Relatório em texto"):
        st.code(text_report, language=None)

    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            "📥 Baixar relatório (Excel)",
            export_pattern_report_excel(report, config=config),
            file_name=default_export_filename('relatorio_glicemia', now, 'xlsx'),
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
    with col2:
        st.download_button(
            "📥 Baixar relatório (texto)",
            text_report,
            file_name=default_export_filename('relatorio_glicemia', now, 'txt'),
            mime="text/plain"
        )


# =============================================================================
# Main Entry Point
# =============================================================================

if __name__ == "__main__":
    render_main()
